from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from ..managers import TenantManager
from .entitymembership import Company

PAYMENT_METHODS = [
    # Used in payment records and by the ledger account resolver
    # Keeps payment method standardized across records
    ("cash", "Cash"),
    ("cheque", "Cheque"),
    ("bank_transfer", "Bank Transfer"),
    ("card", "Card"),
    ("other", "Other"),
]

MOVEMENT_INCOME = "income"
MOVEMENT_EXPENSE = "expense"

MOVEMENT_TYPES = [
    (MOVEMENT_INCOME, "Income"),  # cash in
    (MOVEMENT_EXPENSE, "Expense"),  # cash out
]

RECONCILIATION_PENDING = "pending"
RECONCILIATION_RECONCILED = "reconciled"

RECONCILIATION_STATUS = [
    (RECONCILIATION_PENDING, "Pending"),
    (RECONCILIATION_RECONCILED, "Reconciled"),
]


# ---------- Banking ----------


class BankAccount(models.Model):  # Bank or cash account company maintains
    # Belongs to a Company (multi-tenant)
    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    name = models.CharField(
        max_length=200
    )  # e.g. "BCP Checking", "Petty cash"
    bank_name = models.CharField(max_length=200, blank=True)
    # Partial account number for display/security
    account_number_masked = models.CharField(
        max_length=50, null=True, blank=True)
    currency_code = models.CharField(max_length=10, default="PEN")
    # Informational: chart-of-accounts code of this account (e.g. "1041").
    # Automatic entries take the cash account from the payment method.
    ledger_account_code = models.CharField(max_length=32, blank=True)
    # Inactive accounts are never picked for automatic movements
    is_active = models.BooleanField(default=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        # A company cannot have two accounts with the same name
        constraints = [
            models.UniqueConstraint(
                fields=["company", "name"], name="uq_company_bankaccount_name"
            ),
        ]
        indexes = [
            models.Index(fields=["company", "name"], name="bankacct_company_name_idx"),
            models.Index(fields=["company", "is_active"], name="bankacct_company_active_idx"),
        ]

    def __str__(self):
        # Show name + masked number for clarity
        if self.account_number_masked:
            return f"{self.name} ({self.account_number_masked})"
        return self.name


class CashMovement(
    models.Model
):  # Treasury record of a single inflow/outflow on a bank account
    company = models.ForeignKey(Company, on_delete=models.CASCADE)
    # prevent BankAccount deletion if movements exist
    bank_account = models.ForeignKey(
        BankAccount, on_delete=models.PROTECT, related_name="movements"
    )
    movement_type = models.CharField(max_length=10, choices=MOVEMENT_TYPES)
    amount = models.DecimalField(max_digits=18, decimal_places=2)
    concept = models.CharField(max_length=400)
    date = models.DateField()
    reference = models.CharField(max_length=200, blank=True)
    status = models.CharField(
        max_length=20,
        choices=RECONCILIATION_STATUS,
        default=RECONCILIATION_PENDING,
    )
    # Posted entry whose cash effect this movement mirrors
    journal_entry = models.ForeignKey(
        "JournalEntry",
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="cash_movements",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL,
        related_name="+",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        # Optimizes queries for reconciliation
        # (find all movements for a bank account or for a date)
        indexes = [
            models.Index(fields=["company", "bank_account"], name="cashmov_company_bank_idx"),
            models.Index(fields=["company", "date"], name="cashmov_company_date_idx"),
            models.Index(fields=["company", "status"], name="cashmov_company_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="cashmov_positive_amount",
            ),
        ]

    def __str__(self):
        return (
            f"{self.bank_account.name} - {self.date} - "
            f"{self.movement_type} {self.amount} ({self.status})"
        )

    def clean(self):  # auto-runs when you call full_clean() before saving
        if self.amount is None or self.amount <= 0:
            raise ValidationError("Movement amount must be positive")

        # Tenancy check
        # Ensure bank account chosen belongs to the same company
        if self.bank_account_id and self.bank_account.company_id != self.company_id:
            raise ValidationError(
                "Bank account must belong to the same company.")

    def save(self, *args, **kwargs):
        self.full_clean()  # run validations before saving
        return super().save(*args, **kwargs)
