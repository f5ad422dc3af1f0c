import logging
import time
from django.conf import settings
from django.db import OperationalError, transaction
from ..exceptions import TransactionConflictError

logger = logging.getLogger(__name__)


def run_in_transaction(fn, attempts=None):
    """
    Run `fn()` inside transaction.atomic() and return its result.

    OperationalError (serialization failure, deadlock, lock timeout)
    means a concurrent writer won; the whole unit is re-run with fresh
    reads. Retrying is only possible when this call owns the outermost
    transaction, inside a caller's transaction the conflict surfaces
    immediately.
    """
    if attempts is None:
        attempts = getattr(settings, "LEDGER_TRANSACTION_ATTEMPTS", 3)
    # seconds; the n-th retry waits n times this long
    backoff = getattr(settings, "LEDGER_TRANSACTION_BACKOFF", 0.05)

    for attempt in range(1, attempts + 1):
        owns_transaction = not transaction.get_connection().in_atomic_block
        try:
            with transaction.atomic():
                return fn()
        except OperationalError as exc:
            if not owns_transaction or attempt >= attempts:
                raise TransactionConflictError(
                    f"Transaction aborted after {attempt} attempt(s): {exc}"
                ) from exc
            logger.warning(
                "Transaction conflict (attempt %s/%s), retrying: %s",
                attempt, attempts, exc,
            )
            time.sleep(backoff * attempt)
