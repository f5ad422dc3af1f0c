from decimal import Decimal
from django.test import TestCase
from ledger_core.models import BillPayment, InvoicePayment
from ledger_core.services.ledger_accounts import FLOW_PAYABLE, FLOW_RECEIVABLE
from ledger_core.services.posting import build_payment_entry
from .helpers import PAY_DATE, LedgerFixtureMixin


class PaymentEntryBuilderTests(LedgerFixtureMixin, TestCase):

    def test_collection_entry_debits_bank_and_credits_receivable(self):
        invoice = self.make_invoice("1180.00")
        payment = InvoicePayment(
            company=self.company, invoice=invoice, amount=Decimal("1180.00"),
            payment_date=PAY_DATE, method="bank_transfer", reference="OP-77",
        )

        draft = build_payment_entry(invoice, payment, FLOW_RECEIVABLE)

        self.assertEqual(draft.date, PAY_DATE)
        self.assertEqual(draft.reference, "OP-77")
        self.assertEqual(
            draft.description, "Collection invoice F001-00001 - Acme Retail"
        )
        self.assertEqual(len(draft.lines), 2)
        debit_line, credit_line = draft.lines
        self.assertEqual(
            (debit_line.account_code, debit_line.debit, debit_line.credit),
            ("1041", Decimal("1180.00"), Decimal("0.00")),
        )
        self.assertEqual(
            (credit_line.account_code, credit_line.debit, credit_line.credit),
            ("1212", Decimal("0.00"), Decimal("1180.00")),
        )
        # both lines carry the entry text
        self.assertEqual(debit_line.description, draft.description)
        self.assertEqual(credit_line.description, draft.description)

    def test_payable_entry_debits_payable_and_credits_cash(self):
        bill = self.make_bill("500.00")
        payment = BillPayment(
            company=self.company, bill=bill, amount=Decimal("500.00"),
            payment_date=PAY_DATE, method="cash",
        )

        draft = build_payment_entry(bill, payment, FLOW_PAYABLE)

        self.assertEqual(
            [(l.account_code, l.debit, l.credit) for l in draft.lines],
            [
                ("4212", Decimal("500.00"), Decimal("0.00")),
                ("1011", Decimal("0.00"), Decimal("500.00")),
            ],
        )
        self.assertTrue(draft.description.startswith("Payment invoice E001-00045"))
        # no payment reference: fall back to the document number
        self.assertEqual(draft.reference, "E001-00045")

    def test_entry_is_balanced(self):
        invoice = self.make_invoice("99.99")
        payment = InvoicePayment(
            company=self.company, invoice=invoice, amount=Decimal("33.33"),
            payment_date=PAY_DATE, method="card",
        )

        debit, credit = build_payment_entry(
            invoice, payment, FLOW_RECEIVABLE
        ).totals()

        self.assertEqual(debit, Decimal("33.33"))
        self.assertEqual(debit, credit)
