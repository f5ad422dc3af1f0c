import logging
from django.db import transaction
from ..models import BankAccount, CashMovement
from ..models.banking import MOVEMENT_EXPENSE, MOVEMENT_INCOME
from .ledger_accounts import FLOW_PAYABLE

logger = logging.getLogger(__name__)


def default_bank_account(company):
    """First active bank/cash account of the company, or None."""
    return BankAccount.objects.active(company).order_by("pk").first()


def record_cash_movement(
    company,
    *,
    flow,
    amount,
    concept,
    date,
    reference=None,
    user=None,
    entry=None,
):
    """
    Best-effort treasury record for a posted payment.

    Returns the CashMovement, or None when the company has no active
    bank account or anything goes wrong. Never raises: the ledger
    entry stays valid without its treasury mirror.
    """
    try:
        # savepoint: a failed query must not poison the caller's transaction
        with transaction.atomic():
            bank_account = default_bank_account(company)
            if bank_account is None:
                logger.info(
                    "No active bank account for company %s; "
                    "skipping cash movement for %r",
                    company.pk, concept,
                )
                return None

            movement = CashMovement.objects.create(
                company=company,
                bank_account=bank_account,
                movement_type=(
                    MOVEMENT_EXPENSE if flow == FLOW_PAYABLE else MOVEMENT_INCOME
                ),
                amount=amount,
                concept=concept,
                date=date,
                reference=reference or "",
                journal_entry=entry,
                created_by=user,
            )
    except Exception:
        logger.exception(
            "Could not record cash movement for company %s (%r)",
            company.pk, concept,
        )
        return None

    logger.info(
        "Recorded %s cash movement %s on %s",
        movement.movement_type, movement.pk, bank_account,
    )
    return movement
