from decimal import Decimal
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models.deletion import ProtectedError
from django.test import TestCase
from ledger_core.exceptions import NotFoundError
from ledger_core.models import BillPayment, JournalEntry
from ledger_core.services import (register_bill_payment,
                                  register_invoice_payment)
from .helpers import PAY_DATE, LedgerFixtureMixin


class BillPaymentPostingTests(LedgerFixtureMixin, TestCase):

    def pay(self, bill_id, amount, method="cash", **kwargs):
        return register_bill_payment(
            self.company, bill_id,
            amount=amount, payment_date=PAY_DATE, method=method,
            user=self.user, **kwargs,
        )

    def test_cash_payment_settles_bill(self):
        bill = self.make_bill("500.00")

        result = self.pay(bill.pk, "500.00")

        bill.refresh_from_db()
        self.assertEqual(bill.paid_amount, Decimal("500.00"))
        self.assertEqual(bill.balance, Decimal("0.00"))
        self.assertEqual(bill.status, "paid")

        entry = result.entry
        self.assertEqual(entry.source_type, "bill_payment")
        self.assertEqual(
            [(l.account_code, l.debit, l.credit) for l in entry.lines.all()],
            [
                ("4212", Decimal("500.00"), Decimal("0.00")),
                ("1011", Decimal("0.00"), Decimal("500.00")),
            ],
        )
        self.assertEqual(result.cash_movement.movement_type, "expense")
        self.assertEqual(result.cash_movement.amount, Decimal("500.00"))

    def test_partial_bill_payment_by_cheque(self):
        bill = self.make_bill("500.00")

        result = self.pay(bill.pk, "200.00", method="cheque", reference="CH-881")

        bill.refresh_from_db()
        self.assertEqual(bill.balance, Decimal("300.00"))
        self.assertEqual(bill.status, "partial")
        self.assertEqual(result.entry.reference, "CH-881")
        self.assertEqual(
            [l.account_code for l in result.entry.lines.all()], ["4212", "1041"]
        )

    def test_invoice_and_bill_entries_share_one_sequence(self):
        invoice = self.make_invoice("100.00")
        bill = self.make_bill("100.00")

        register_invoice_payment(
            self.company, invoice.pk, amount="100.00", payment_date=PAY_DATE,
            method="cash", user=self.user,
        )
        self.pay(bill.pk, "100.00")

        self.assertEqual(
            sorted(JournalEntry.objects.for_company(self.company)
                   .values_list("number", flat=True)),
            ["ASI-001", "ASI-002"],
        )

    def test_missing_bill_raises_not_found(self):
        with self.assertRaises(NotFoundError):
            self.pay(424242, "10.00")

    def test_payment_records_are_immutable(self):
        bill = self.make_bill("500.00")
        payment = self.pay(bill.pk, "100.00").payment

        payment.amount = Decimal("1.00")
        with self.assertRaises(ValidationError):
            payment.save()
        with self.assertRaises(ValidationError):
            payment.delete()

        self.assertEqual(
            BillPayment.objects.get(pk=payment.pk).amount, Decimal("100.00")
        )

    def test_bill_with_payments_cannot_be_deleted(self):
        bill = self.make_bill("500.00")
        self.pay(bill.pk, "100.00")

        with self.assertRaises(ProtectedError):
            bill.delete()

    def test_bulk_delete_of_payments_is_blocked(self):
        bill = self.make_bill("500.00")
        self.pay(bill.pk, "100.00")

        # savepoint: the collector aborts inside atomic(savepoint=False)
        with self.assertRaises(ValidationError), transaction.atomic():
            BillPayment.objects.for_company(self.company).delete()
        self.assertEqual(BillPayment.objects.count(), 1)

    def test_company_with_payments_keeps_its_books(self):
        bill = self.make_bill("500.00")
        self.pay(bill.pk, "100.00")

        with self.assertRaises(ProtectedError):
            self.company.delete()
        self.assertEqual(BillPayment.objects.for_company(self.company).count(), 1)
        self.assertEqual(JournalEntry.objects.for_company(self.company).count(), 1)
