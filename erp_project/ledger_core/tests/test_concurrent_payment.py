import threading
from decimal import Decimal
from django.db import connection
from django.test import TransactionTestCase, override_settings
from ledger_core.models import InvoicePayment
from ledger_core.services import register_invoice_payment
from .helpers import PAY_DATE, LedgerFixtureMixin


class ConcurrentInvoicePaymentTests(LedgerFixtureMixin, TransactionTestCase):
    """
    Two collections race on one invoice from separate threads, each
    with its own connection and its own transaction.
    """

    @override_settings(LEDGER_TRANSACTION_ATTEMPTS=10)
    def test_concurrent_payments_never_go_negative(self):
        invoice = self.make_invoice("400.00")
        barrier = threading.Barrier(2)
        errors = []

        def collect():
            try:
                # release both threads at the same moment
                barrier.wait(timeout=10)
                register_invoice_payment(
                    self.company, invoice.pk, amount="300.00",
                    payment_date=PAY_DATE, method="bank_transfer",
                    user=self.user,
                )
            except Exception as exc:
                errors.append(exc)
            finally:
                connection.close()

        threads = [threading.Thread(target=collect) for _ in range(2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=60)

        self.assertEqual(errors, [])
        invoice.refresh_from_db()
        self.assertEqual(invoice.paid_amount, Decimal("600.00"))
        self.assertEqual(invoice.balance, Decimal("0.00"))
        self.assertEqual(invoice.status, "paid")
        self.assertEqual(InvoicePayment.objects.filter(invoice=invoice).count(), 2)
