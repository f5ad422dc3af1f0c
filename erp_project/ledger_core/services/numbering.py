import logging
import re
from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models.functions import Length
from django.utils import timezone
from ..models import JournalEntry

logger = logging.getLogger(__name__)


def entry_number_prefix():
    return getattr(settings, "LEDGER_ENTRY_NUMBER_PREFIX", "ASI")


def _fallback_number(prefix):
    # last 6 digits of the epoch in milliseconds
    millis = int(timezone.now().timestamp() * 1000)
    return f"{prefix}-{str(millis)[-6:]}"


def next_entry_number(company) -> str:
    """
    Next journal entry number for `company`, e.g. "ASI-008".

    Reads the highest existing number and increments it. When that
    number cannot be read or parsed, falls back to a timestamp suffix
    so posting never blocks on numbering. Two concurrent callers may
    receive the same number.
    """
    prefix = entry_number_prefix()
    pattern = re.compile(rf"^{re.escape(prefix)}-(\d+)$")

    try:
        # Longer numbers first so "ASI-1000" ranks above "ASI-999"
        with transaction.atomic():
            last = (
                JournalEntry.objects.for_company(company)
                .order_by(Length("number").desc(), "-number")
                .values_list("number", flat=True)
                .first()
            )
    except DatabaseError:
        logger.warning(
            "Could not read last entry number for company %s; "
            "using timestamp fallback",
            company.pk,
            exc_info=True,
        )
        return _fallback_number(prefix)

    # No entries yet, start from 1
    if last is None:
        return f"{prefix}-001"

    match = pattern.match(last)
    if not match:
        logger.warning(
            "Unexpected entry number %r for company %s; "
            "using timestamp fallback",
            last,
            company.pk,
        )
        return _fallback_number(prefix)

    # keep the width of the last suffix ("ASI-000123" -> "ASI-000124")
    # so the new number outranks it under the length-first ordering
    digits = match.group(1)
    width = max(len(digits), 3)
    return f"{prefix}-{int(digits) + 1:0{width}d}"
