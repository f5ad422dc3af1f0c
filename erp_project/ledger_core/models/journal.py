from decimal import Decimal
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from ..managers import TenantManager
from .entitymembership import Company

JOURNAL_DRAFT = "draft"
JOURNAL_POSTED = "posted"

JOURNAL_STATUS = [
    (JOURNAL_DRAFT, "Draft"),  # still editable
    (JOURNAL_POSTED, "Posted"),  # finalized
]


# ---------- Journal (Header) & JournalLine ----------
class JournalEntry(models.Model):  # Represents one accounting transaction
    # Multi-tenant: every entry belongs to a company
    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    # Sequential, human-readable number per company (e.g. "ASI-007")
    number = models.CharField(max_length=32)
    date = models.DateField()
    reference = models.CharField(max_length=200, blank=True)
    description = models.TextField(blank=True)
    status = models.CharField(
        max_length=10, choices=JOURNAL_STATUS, default=JOURNAL_DRAFT
    )
    posted_at = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    # polymorphic source info (invoice_payment, bill_payment)
    # Helps trace back where the JE originated
    source_type = models.CharField(max_length=50, blank=True)
    source_id = models.BigIntegerField(null=True, blank=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        verbose_name_plural = "journal entries"
        indexes = [
            models.Index(fields=["company", "date"], name="je_company_date_idx"),
            models.Index(fields=["company", "number"], name="je_company_number_idx"),
            models.Index(fields=["company", "source_type", "source_id"], name="je_company_source_idx"),
        ]
        # No unique constraint on number: the numbering fallback
        # may legitimately collide under concurrent load.

    def __str__(self):
        return f"JE {self.number} {self.date} [{self.status}]"

    # Aggregate all debit and credit amounts across entry's lines
    def compute_totals(self):
        """Return debits, credits sums for lines"""
        aggs = self.lines.aggregate(
            total_debit=models.Sum("debit"),
            total_credit=models.Sum("credit"),
        )
        return (
            aggs["total_debit"] or Decimal("0.00"),
            aggs["total_credit"] or Decimal("0.00"),
        )

    # True if double-entry rule holds: total debits = total credits
    def is_balanced(self):
        debit, credit = self.compute_totals()
        return debit == credit

    def save(self, *args, **kwargs):
        if self.pk:  # Does this row already exist in DB?
            orig = JournalEntry.objects.filter(pk=self.pk).only("status").first()
            if orig and orig.status == JOURNAL_POSTED and self.status != JOURNAL_POSTED:
                # disallow toggling posted flag
                raise ValidationError("Cannot unpost a posted journal")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        if self.status == JOURNAL_POSTED:
            raise ValidationError("Cannot delete a posted journal entry.")
        return super().delete(*args, **kwargs)


class JournalLine(models.Model):  # Stores Lines ( credits / debits )
    """
    Each line belongs to a journal entry and names a ledger account
    by its chart-of-accounts code (no FK to an account table).
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    journal = models.ForeignKey(
        JournalEntry,
        on_delete=models.CASCADE,
        related_name="lines",
    )
    # Position of the line inside the entry (1, 2, ...)
    line_no = models.PositiveSmallIntegerField(default=1)

    account_code = models.CharField(max_length=32)
    account_name = models.CharField(max_length=200, blank=True)
    description = models.CharField(max_length=400, blank=True)

    debit = models.DecimalField(max_digits=18, decimal_places=2, default=0)
    credit = models.DecimalField(max_digits=18, decimal_places=2, default=0)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        ordering = ("line_no", "pk")
        indexes = [
            models.Index(fields=["company", "account_code"], name="jl_company_account_idx"),
            models.Index(fields=["company", "journal"], name="jl_company_journal_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(debit__gte=0) & models.Q(credit__gte=0),
                name="jl_non_negative_amounts",
            ),
            # exactly one side carries an amount
            models.CheckConstraint(
                condition=(
                    (models.Q(debit__gt=0) & models.Q(credit=0))
                    | (models.Q(debit=0) & models.Q(credit__gt=0))
                ),
                name="jl_debit_xor_credit",
            ),
        ]

    def __str__(self):
        return (
            f"{self.journal_id} | {self.account_code} {self.account_name} | "
            f"D:{self.debit} C:{self.credit}"
        )

    def clean(self):
        if self.debit < 0 or self.credit < 0:
            raise ValidationError("Debit and credit must be >= 0")
        if self.debit > 0 and self.credit > 0:
            raise ValidationError(
                "JournalLine should not have both debit and credit > 0"
            )
        if self.debit == 0 and self.credit == 0:
            raise ValidationError(
                "JournalLine requires a non-0 amount on either debit or credit"
            )

        # Every line must belong to same company as its parent journal
        if self.journal_id and self.company_id != self.journal.company_id:
            raise ValidationError(
                "JournalLine.company must equal JournalEntry.company"
            )

        # Lines of a posted journal are frozen
        if self.pk and JournalEntry.objects.filter(
            pk=self.journal_id, status=JOURNAL_POSTED
        ).exists():
            raise ValidationError(
                "Cannot modify JournalLine: parent JournalEntry is posted."
            )

    def save(self, *args, **kwargs):
        # copy company from the parent journal when not given
        if not self.company_id and self.journal_id:
            self.company_id = self.journal.company_id
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        # Prevent deletion if parent journal is posted
        if JournalEntry.objects.filter(
            pk=self.journal_id, status=JOURNAL_POSTED
        ).exists():
            raise ValidationError(
                "Cannot delete JournalLine: parent JournalEntry is posted."
            )
        return super().delete(*args, **kwargs)
