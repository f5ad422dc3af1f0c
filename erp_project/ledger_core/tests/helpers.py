import datetime
from decimal import Decimal
from django.contrib.auth import get_user_model
from ledger_core.models import (BankAccount, Bill, Company, Customer,
                                EntityMembership, Invoice, Vendor)

User = get_user_model()

PAY_DATE = datetime.date(2025, 9, 15)


class LedgerFixtureMixin:
    """Company with an accountant, one customer, one vendor and a bank account."""

    with_bank_account = True

    def setUp(self):
        self.user = User.objects.create_user(username="ana", password="pw")
        self.company = Company.objects.create(
            name="Test Co", slug="test-co", owner=self.user
        )
        EntityMembership.objects.create(
            user=self.user, company=self.company, role="accountant"
        )
        self.customer = Customer.objects.create(
            company=self.company, name="Acme Retail"
        )
        self.vendor = Vendor.objects.create(
            company=self.company, name="Office Supplies Co"
        )
        self.bank = None
        if self.with_bank_account:
            self.bank = BankAccount.objects.create(
                company=self.company, name="Operating checking"
            )

    def make_invoice(self, total, paid="0.00", number="F001-00001", **kwargs):
        return Invoice.objects.create(
            company=self.company,
            customer=self.customer,
            number=number,
            issue_date=PAY_DATE,
            total=Decimal(total),
            paid_amount=Decimal(paid),
            **kwargs,
        )

    def make_bill(self, total, paid="0.00", number="E001-00045", **kwargs):
        return Bill.objects.create(
            company=self.company,
            vendor=self.vendor,
            number=number,
            issue_date=PAY_DATE,
            total=Decimal(total),
            paid_amount=Decimal(paid),
            **kwargs,
        )
