import datetime
from decimal import Decimal
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils.text import slugify
from ledger_core.models import (
    BankAccount,
    Bill,
    Company,
    Customer,
    EntityMembership,
    Invoice,
    Vendor,
)
from ledger_core.services import register_invoice_payment


User = get_user_model()


class Command(BaseCommand):
    help = (
        "Create a demo tenant (company), user, and sample receivables and "
        "payables, posting one partial collection through the ledger."
    )

    # Define command-line arguments
    def add_arguments(self, parser):
        parser.add_argument(
            "--company-name",
            default="Demo Company",
            help="Name of the demo company to create.",
        )
        parser.add_argument(
            "--username", default="demo", help="Username for the demo user."
        )
        parser.add_argument(
            "--password", default="demo123", help="Password for the demo user."
        )

    @transaction.atomic
    def handle(self, *args, **options):
        company_name = options["company_name"]
        username = options["username"]
        password = options["password"]
        today = datetime.date.today()

        # 1. Create user
        user, created = User.objects.get_or_create(
            username=username,
            defaults={"email": f"{username}@example.com"},
        )
        if created:  # only set the password for a new user
            user.set_password(password)
            user.save()
        self.stdout.write(
            self.style.SUCCESS(f"Created user: {user.username} (pw={password})")
        )

        # 2. Create company and make the user its owner
        company, _ = Company.objects.get_or_create(
            slug=slugify(company_name) or "company",
            defaults={"name": company_name, "owner": user},
        )
        EntityMembership.objects.get_or_create(
            user=user, company=company, defaults={"role": "owner"}
        )
        self.stdout.write(self.style.SUCCESS(f"Created company: {company}"))

        # 3. Bank account that receives automatic cash movements
        bank, _ = BankAccount.objects.get_or_create(
            company=company,
            name="Operating checking",
            defaults={
                "bank_name": "Demo Bank",
                "account_number_masked": "****1234",
                "ledger_account_code": "1041",
            },
        )
        self.stdout.write(self.style.SUCCESS(f"Created bank account: {bank}"))

        # 4. Counterparties
        acme, _ = Customer.objects.get_or_create(
            company=company, name="Acme Retail", defaults={"tax_id": "20100070970"}
        )
        andes, _ = Customer.objects.get_or_create(
            company=company, name="Andes Foods", defaults={"tax_id": "20512345678"}
        )
        supplier, _ = Vendor.objects.get_or_create(
            company=company, name="Office Supplies Co", defaults={"tax_id": "20600011122"}
        )
        self.stdout.write(self.style.SUCCESS("Created customers and vendor"))

        # 5. Open documents
        pending_invoice, _ = Invoice.objects.get_or_create(
            company=company,
            number="F001-00001",
            defaults={
                "customer": acme,
                "issue_date": today,
                "due_date": today + datetime.timedelta(days=30),
                "total": Decimal("1180.00"),
                "created_by": user,
            },
        )
        partial_invoice, inv_created = Invoice.objects.get_or_create(
            company=company,
            number="F001-00002",
            defaults={
                "customer": andes,
                "issue_date": today,
                "due_date": today + datetime.timedelta(days=30),
                "total": Decimal("2950.00"),
                "created_by": user,
            },
        )
        bill, _ = Bill.objects.get_or_create(
            company=company,
            number="E001-00045",
            defaults={
                "vendor": supplier,
                "issue_date": today,
                "due_date": today + datetime.timedelta(days=15),
                "total": Decimal("500.00"),
                "created_by": user,
            },
        )
        self.stdout.write(
            self.style.SUCCESS(
                f"Created documents: {pending_invoice}, {partial_invoice}, {bill}"
            )
        )

        # 6. Post a partial collection (only the first time the demo runs)
        if inv_created:
            result = register_invoice_payment(
                company,
                partial_invoice.pk,
                amount=Decimal("1000.00"),
                payment_date=today,
                method="bank_transfer",
                user=user,
                reference="OP-000123",
            )
            entry = result.entry.number if result.entry else "none"
            self.stdout.write(
                self.style.SUCCESS(
                    f"Posted collection on {result.document} "
                    f"(balance {result.document.balance}, entry {entry})"
                )
            )

        self.stdout.write(self.style.SUCCESS("Demo tenant setup complete!"))
