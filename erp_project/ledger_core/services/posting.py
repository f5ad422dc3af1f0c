import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List
from django.db import transaction
from django.utils import timezone

from ..models import JournalEntry, JournalLine
from ..models.journal import JOURNAL_POSTED
from .ledger_accounts import (FLOW_PAYABLE, FLOW_RECEIVABLE, account_name,
                              resolve_accounts)
from .numbering import next_entry_number

logger = logging.getLogger(__name__)

# JournalEntry.source_type for entries produced from payments
SOURCE_TYPE_BY_FLOW = {
    FLOW_RECEIVABLE: "invoice_payment",
    FLOW_PAYABLE: "bill_payment",
}


@dataclass
class LineDraft:
    account_code: str
    account_name: str
    description: str
    debit: Decimal = Decimal("0.00")
    credit: Decimal = Decimal("0.00")


@dataclass
class EntryDraft:
    """Unsaved journal entry: header fields plus ordered lines."""
    date: date
    description: str
    reference: str
    lines: List[LineDraft] = field(default_factory=list)

    def totals(self):
        debit = sum((line.debit for line in self.lines), Decimal("0.00"))
        credit = sum((line.credit for line in self.lines), Decimal("0.00"))
        return debit, credit


# ----------------------------
# Payment journal workflows
# ----------------------------
def payment_description(document, flow) -> str:
    # e.g. "Collection invoice F001-12 - Acme SAC"
    verb = "Payment" if flow == FLOW_PAYABLE else "Collection"
    return f"{verb} invoice {document.number} - {document.counterparty.name}"


def build_payment_entry(document, payment, flow) -> EntryDraft:
    """
    Two-line entry for a payment:
      line 1 debits the resolved debit account for the full amount
      line 2 credits the resolved credit account for the same amount
    Balanced by construction.
    """
    accounts = resolve_accounts(payment.method, flow)
    text = payment_description(document, flow)
    amount = payment.amount

    return EntryDraft(
        date=payment.payment_date,
        description=text,
        reference=payment.reference or document.number,
        lines=[
            LineDraft(
                account_code=accounts.debit,
                account_name=account_name(accounts.debit),
                description=text,
                debit=amount,
            ),
            LineDraft(
                account_code=accounts.credit,
                account_name=account_name(accounts.credit),
                description=text,
                credit=amount,
            ),
        ],
    )


def create_payment_journal(document, payment, flow, user=None) -> JournalEntry:
    """
    Number, persist and post the entry for `payment`.
    Header and lines are written in one atomic block.
    """
    draft = build_payment_entry(document, payment, flow)
    company = document.company

    with transaction.atomic():
        je = JournalEntry.objects.create(
            company=company,
            number=next_entry_number(company),
            date=draft.date,
            description=draft.description,
            reference=draft.reference,
            status=JOURNAL_POSTED,
            posted_at=timezone.now(),
            created_by=user,
            source_type=SOURCE_TYPE_BY_FLOW[flow],
            source_id=payment.pk,
        )
        for line_no, line in enumerate(draft.lines, start=1):
            JournalLine.objects.create(
                company=company,
                journal=je,
                line_no=line_no,
                account_code=line.account_code,
                account_name=line.account_name,
                description=line.description,
                debit=line.debit,
                credit=line.credit,
            )

    logger.info(
        "Posted journal %s for %s %s (amount %s)",
        je.number, je.source_type, payment.pk, payment.amount,
    )
    return je
