from unittest import mock
from django.db import OperationalError, transaction
from django.test import TransactionTestCase, override_settings
from ledger_core.exceptions import TransactionConflictError
from ledger_core.models import Company
from ledger_core.services import run_in_transaction


class RunInTransactionTests(TransactionTestCase):
    """
    TransactionTestCase: retries only happen when run_in_transaction
    owns the outermost transaction, which TestCase never allows.
    """

    def flaky(self, failures):
        calls = []

        def fn():
            calls.append(1)
            Company.objects.create(name=f"Co {len(calls)}", slug=f"co-{len(calls)}")
            if len(calls) <= failures:
                raise OperationalError("could not serialize access")
            return len(calls)

        return fn, calls

    def test_retries_conflict_and_rolls_back_failed_attempts(self):
        fn, calls = self.flaky(failures=2)

        with self.assertLogs("ledger_core.services.transactions", "WARNING") as cm:
            result = run_in_transaction(fn)

        self.assertEqual(result, 3)
        self.assertEqual(len(cm.records), 2)
        # only the successful attempt left a row behind
        self.assertEqual(list(Company.objects.values_list("slug", flat=True)), ["co-3"])

    @override_settings(LEDGER_TRANSACTION_ATTEMPTS=2)
    def test_exhausted_attempts_raise_conflict(self):
        fn, calls = self.flaky(failures=5)

        with self.assertRaises(TransactionConflictError) as ctx:
            run_in_transaction(fn)

        self.assertEqual(len(calls), 2)
        self.assertIsInstance(ctx.exception.__cause__, OperationalError)
        self.assertFalse(Company.objects.exists())

    def test_conflict_inside_caller_transaction_is_not_retried(self):
        fn, calls = self.flaky(failures=1)

        with self.assertRaises(TransactionConflictError):
            with transaction.atomic():
                run_in_transaction(fn)

        self.assertEqual(len(calls), 1)
        self.assertFalse(Company.objects.exists())

    def test_other_errors_propagate_unchanged(self):
        def fn():
            raise ValueError("boom")

        with self.assertRaises(ValueError):
            run_in_transaction(fn)

    @override_settings(LEDGER_TRANSACTION_BACKOFF=0.5)
    def test_retries_back_off_linearly(self):
        fn, calls = self.flaky(failures=2)

        with mock.patch("ledger_core.services.transactions.time.sleep") as sleep:
            with self.assertLogs("ledger_core.services.transactions", "WARNING"):
                run_in_transaction(fn)

        self.assertEqual(
            [c.args[0] for c in sleep.call_args_list], [0.5, 1.0]
        )
