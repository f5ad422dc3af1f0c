import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


PAYMENT_METHODS = [
    ("cash", "Cash"),
    ("cheque", "Cheque"),
    ("bank_transfer", "Bank Transfer"),
    ("card", "Card"),
    ("other", "Other"),
]

DOC_STATUS_CHOICES = [
    ("pending", "Pending"),
    ("partial", "Partial"),
    ("paid", "Paid"),
    ("overdue", "Overdue"),
    ("void", "Void"),
]


def _id():
    return models.BigAutoField(
        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
    )


def _money(**kwargs):
    return models.DecimalField(decimal_places=2, max_digits=18, **kwargs)


def _company():
    return models.ForeignKey(
        on_delete=django.db.models.deletion.CASCADE, to="ledger_core.company"
    )


def _created_by():
    return models.ForeignKey(
        blank=True,
        null=True,
        on_delete=django.db.models.deletion.SET_NULL,
        related_name="+",
        to=settings.AUTH_USER_MODEL,
    )


def _document_fields():
    return [
        ("id", _id()),
        ("number", models.CharField(max_length=64)),
        ("issue_date", models.DateField()),
        ("due_date", models.DateField(blank=True, null=True)),
        ("description", models.TextField(blank=True)),
        ("total", _money(default=Decimal("0.00"))),
        ("paid_amount", _money(default=Decimal("0.00"))),
        ("balance", _money(default=Decimal("0.00"))),
        (
            "status",
            models.CharField(
                choices=DOC_STATUS_CHOICES, default="pending", max_length=10
            ),
        ),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("modified_at", models.DateTimeField(auto_now=True)),
        ("company", _company()),
        ("created_by", _created_by()),
    ]


def _payment_fields():
    return [
        ("id", _id()),
        ("amount", _money()),
        ("payment_date", models.DateField()),
        (
            "method",
            models.CharField(
                choices=PAYMENT_METHODS, default="cash", max_length=20
            ),
        ),
        ("reference", models.CharField(blank=True, max_length=200)),
        ("notes", models.TextField(blank=True)),
        ("created_at", models.DateTimeField(auto_now_add=True)),
        ("company", _company()),
        ("created_by", _created_by()),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Company",
            fields=[
                ("id", _id()),
                ("name", models.CharField(max_length=200)),
                ("slug", models.SlugField(max_length=80, unique=True)),
                ("currency_code", models.CharField(default="PEN", max_length=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "owner",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="owned_companies",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "companies",
            },
        ),
        migrations.CreateModel(
            name="EntityMembership",
            fields=[
                ("id", _id()),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("owner", "Owner"),
                            ("admin", "Admin"),
                            ("accountant", "Accountant"),
                            ("viewer", "Viewer"),
                        ],
                        default="viewer",
                        max_length=20,
                    ),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="memberships",
                        to="ledger_core.company",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="memberships",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "user"],
                        name="membership_company_user_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "company"),
                        name="uq_user_company_membership",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", _id()),
                ("name", models.CharField(max_length=200)),
                ("tax_id", models.CharField(blank=True, max_length=32)),
                (
                    "contact_email",
                    models.EmailField(blank=True, max_length=254, null=True),
                ),
                ("payment_terms_days", models.IntegerField(default=30)),
                ("is_active", models.BooleanField(default=True)),
                ("company", _company()),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "name"],
                        name="customer_company_name_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "name"),
                        name="uq_company_customer_name",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Vendor",
            fields=[
                ("id", _id()),
                ("name", models.CharField(max_length=200)),
                ("tax_id", models.CharField(blank=True, max_length=32)),
                (
                    "contact_email",
                    models.EmailField(blank=True, max_length=254, null=True),
                ),
                ("payment_terms_days", models.IntegerField(default=30)),
                ("is_active", models.BooleanField(default=True)),
                ("company", _company()),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "name"],
                        name="vendor_company_name_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "name"),
                        name="uq_company_vendor_name",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="BankAccount",
            fields=[
                ("id", _id()),
                ("name", models.CharField(max_length=200)),
                ("bank_name", models.CharField(blank=True, max_length=200)),
                (
                    "account_number_masked",
                    models.CharField(blank=True, max_length=50, null=True),
                ),
                ("currency_code", models.CharField(default="PEN", max_length=10)),
                (
                    "ledger_account_code",
                    models.CharField(blank=True, max_length=32),
                ),
                ("is_active", models.BooleanField(default=True)),
                ("company", _company()),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "name"],
                        name="bankacct_company_name_idx",
                    ),
                    models.Index(
                        fields=["company", "is_active"],
                        name="bankacct_company_active_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "name"),
                        name="uq_company_bankaccount_name",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalEntry",
            fields=[
                ("id", _id()),
                ("number", models.CharField(max_length=32)),
                ("date", models.DateField()),
                ("reference", models.CharField(blank=True, max_length=200)),
                ("description", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("posted", "Posted")],
                        default="draft",
                        max_length=10,
                    ),
                ),
                ("posted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("source_type", models.CharField(blank=True, max_length=50)),
                ("source_id", models.BigIntegerField(blank=True, null=True)),
                ("company", _company()),
                ("created_by", _created_by()),
            ],
            options={
                "verbose_name_plural": "journal entries",
                "indexes": [
                    models.Index(
                        fields=["company", "date"], name="je_company_date_idx"
                    ),
                    models.Index(
                        fields=["company", "number"],
                        name="je_company_number_idx",
                    ),
                    models.Index(
                        fields=["company", "source_type", "source_id"],
                        name="je_company_source_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="JournalLine",
            fields=[
                ("id", _id()),
                ("line_no", models.PositiveSmallIntegerField(default=1)),
                ("account_code", models.CharField(max_length=32)),
                ("account_name", models.CharField(blank=True, max_length=200)),
                ("description", models.CharField(blank=True, max_length=400)),
                ("debit", _money(default=0)),
                ("credit", _money(default=0)),
                ("company", _company()),
                (
                    "journal",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lines",
                        to="ledger_core.journalentry",
                    ),
                ),
            ],
            options={
                "ordering": ("line_no", "pk"),
                "indexes": [
                    models.Index(
                        fields=["company", "account_code"],
                        name="jl_company_account_idx",
                    ),
                    models.Index(
                        fields=["company", "journal"],
                        name="jl_company_journal_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("debit__gte", 0), ("credit__gte", 0)),
                        name="jl_non_negative_amounts",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("debit__gt", 0), ("credit", 0)),
                            models.Q(("debit", 0), ("credit__gt", 0)),
                            _connector="OR",
                        ),
                        name="jl_debit_xor_credit",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="CashMovement",
            fields=[
                ("id", _id()),
                (
                    "movement_type",
                    models.CharField(
                        choices=[("income", "Income"), ("expense", "Expense")],
                        max_length=10,
                    ),
                ),
                ("amount", _money()),
                ("concept", models.CharField(max_length=400)),
                ("date", models.DateField()),
                ("reference", models.CharField(blank=True, max_length=200)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("reconciled", "Reconciled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "bank_account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="movements",
                        to="ledger_core.bankaccount",
                    ),
                ),
                ("company", _company()),
                ("created_by", _created_by()),
                (
                    "journal_entry",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="cash_movements",
                        to="ledger_core.journalentry",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "bank_account"],
                        name="cashmov_company_bank_idx",
                    ),
                    models.Index(
                        fields=["company", "date"],
                        name="cashmov_company_date_idx",
                    ),
                    models.Index(
                        fields=["company", "status"],
                        name="cashmov_company_status_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", 0)),
                        name="cashmov_positive_amount",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Invoice",
            fields=_document_fields() + [
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        to="ledger_core.customer",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "number"],
                        name="invoice_company_number_idx",
                    ),
                    models.Index(
                        fields=["company", "customer"],
                        name="invoice_company_customer_idx",
                    ),
                    models.Index(
                        fields=["company", "status"],
                        name="invoice_company_status_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "number"),
                        name="uq_invoice_company_number",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="InvoicePayment",
            fields=_payment_fields() + [
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="ledger_core.invoice",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "invoice"],
                        name="invpay_company_invoice_idx",
                    ),
                    models.Index(
                        fields=["company", "payment_date"],
                        name="invpay_company_date_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", 0)),
                        name="invpay_positive_amount",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Bill",
            fields=_document_fields() + [
                (
                    "vendor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        to="ledger_core.vendor",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "number"],
                        name="bill_company_number_idx",
                    ),
                    models.Index(
                        fields=["company", "vendor"],
                        name="bill_company_vendor_idx",
                    ),
                    models.Index(
                        fields=["company", "status"],
                        name="bill_company_status_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("company", "number"),
                        name="uq_bill_company_number",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="BillPayment",
            fields=_payment_fields() + [
                (
                    "bill",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="ledger_core.bill",
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "bill"],
                        name="billpay_company_bill_idx",
                    ),
                    models.Index(
                        fields=["company", "payment_date"],
                        name="billpay_company_date_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount__gt", 0)),
                        name="billpay_positive_amount",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="AuditLog",
            fields=[
                ("id", _id()),
                ("action", models.CharField(max_length=50)),
                ("object_type", models.CharField(max_length=100)),
                ("object_id", models.CharField(max_length=100)),
                ("changes", models.JSONField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "company",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        to="ledger_core.company",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "indexes": [
                    models.Index(
                        fields=["company", "user"],
                        name="audit_company_user_idx",
                    ),
                    models.Index(
                        fields=["company", "created_at"],
                        name="audit_company_created_idx",
                    ),
                ],
            },
        ),
    ]
