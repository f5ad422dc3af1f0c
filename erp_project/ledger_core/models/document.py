from decimal import Decimal
from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from .banking import PAYMENT_METHODS
from .entitymembership import Company

DOC_STATUS_PENDING = "pending"
DOC_STATUS_PARTIAL = "partial"
DOC_STATUS_PAID = "paid"
DOC_STATUS_OVERDUE = "overdue"
DOC_STATUS_VOID = "void"

DOC_STATUS_CHOICES = [
    (DOC_STATUS_PENDING, "Pending"),
    (DOC_STATUS_PARTIAL, "Partial"),
    (DOC_STATUS_PAID, "Paid"),
    (DOC_STATUS_OVERDUE, "Overdue"),
    (DOC_STATUS_VOID, "Void"),
]
""" Workflow:
    pending = issued, nothing collected yet.
    partial = some payments applied, balance left.
    paid = fully settled.
    overdue = past due date (set by the ageing job, not here).
    void = canceled, terminal. """

ZERO = Decimal("0.00")


# ---------- Source documents (Invoice / Bill) ----------
class SourceDocument(models.Model):
    """
    Fields and payment arithmetic shared by receivable invoices
    and payable bills. Concrete models add the counterparty FK.
    """

    # Multi-tenant: every document belongs to a company
    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    # human-readable (e.g. "F001-00012")
    number = models.CharField(max_length=64)
    issue_date = models.DateField()
    due_date = models.DateField(null=True, blank=True)
    description = models.TextField(blank=True)

    total = models.DecimalField(
        max_digits=18, decimal_places=2, default=ZERO
    )
    # Cumulative amount of all payments applied so far
    paid_amount = models.DecimalField(
        max_digits=18, decimal_places=2, default=ZERO
    )
    # Always max(0, total - paid_amount), kept in sync by save()
    balance = models.DecimalField(
        max_digits=18, decimal_places=2, default=ZERO
    )
    status = models.CharField(
        max_length=10, choices=DOC_STATUS_CHOICES, default=DOC_STATUS_PENDING
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True

    @property
    def counterparty(self):
        raise NotImplementedError

    def compute_balance(self, paid_amount=None):
        paid = self.paid_amount if paid_amount is None else paid_amount
        # if payments overshoot for any reason, it caps at 0, not negative
        return max(self.total - paid, ZERO)

    def apply_payment(self, amount):
        """
        Apply `amount` to paid/balance/status in memory.
        Returns the field names the caller must persist.
        """
        if self.status == DOC_STATUS_VOID:
            raise ValidationError(f"Cannot apply a payment to void {self}.")

        new_paid = self.paid_amount + amount
        new_balance = self.compute_balance(new_paid)

        if new_balance <= 0:
            new_status = DOC_STATUS_PAID
        elif ZERO < new_paid < self.total:
            new_status = DOC_STATUS_PARTIAL
        else:
            new_status = self.status

        self.paid_amount = new_paid
        self.balance = new_balance
        self.status = new_status
        return ["paid_amount", "balance", "status", "modified_at"]

    def clean(self):
        if self.total < 0:
            raise ValidationError("Total must be >= 0")
        if self.paid_amount < 0:
            raise ValidationError("Paid amount must be >= 0")

        # Ensure counterparty chosen belongs to the same company
        party = self.counterparty
        if party is not None and party.company_id != self.company_id:
            raise ValidationError(
                f"{party.__class__.__name__} must belong to the same company."
            )

    def save(self, *args, **kwargs):
        # balance is derived, never trusted from input
        self.balance = self.compute_balance()
        self.full_clean()
        return super().save(*args, **kwargs)


# ---------- Payment records ----------
class PaymentRecord(models.Model):
    """
    Append-only fact: one row per payment event.
    Never updated or deleted once saved.
    """

    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    amount = models.DecimalField(max_digits=18, decimal_places=2)
    payment_date = models.DateField()
    method = models.CharField(
        max_length=20, choices=PAYMENT_METHODS, default="cash"
    )
    # bank operation number, cheque number, voucher...
    reference = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True

    @property
    def document(self):
        raise NotImplementedError

    def clean(self):
        if self.amount is None or self.amount <= 0:
            raise ValidationError("Payment amount must be positive")

        doc = self.document
        if doc is not None and doc.company_id != self.company_id:
            raise ValidationError(
                "Payment and document must belong to the same company."
            )

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("Payment records are immutable.")
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Payment records cannot be deleted.")
