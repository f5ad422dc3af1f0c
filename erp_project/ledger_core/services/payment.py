import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from django.core.exceptions import ValidationError

from ..exceptions import NotFoundError
from ..models import (Bill, BillPayment, CashMovement, Invoice,
                      InvoicePayment, JournalEntry)
from .audit_helper import log_action
from .auth import ensure_authenticated
from .ledger_accounts import FLOW_PAYABLE, FLOW_RECEIVABLE
from .posting import create_payment_journal
from .transactions import run_in_transaction
from .treasury import record_cash_movement

logger = logging.getLogger(__name__)


@dataclass
class PostingResult:
    document: object  # Invoice or Bill, as committed
    payment: object  # InvoicePayment or BillPayment
    entry: Optional[JournalEntry] = None
    cash_movement: Optional[CashMovement] = None


# ----------------------------
# Payment-related workflows
# ----------------------------
def register_invoice_payment(
    company, invoice_id, *, amount, payment_date, method, user,
    reference="", notes="",
) -> PostingResult:
    """Register a customer collection against an invoice and post it."""
    return _register_payment(
        company, Invoice, InvoicePayment, "invoice", FLOW_RECEIVABLE,
        invoice_id, amount=amount, payment_date=payment_date,
        method=method, user=user, reference=reference, notes=notes,
    )


def register_bill_payment(
    company, bill_id, *, amount, payment_date, method, user,
    reference="", notes="",
) -> PostingResult:
    """Register a payment to a vendor against a bill and post it."""
    return _register_payment(
        company, Bill, BillPayment, "bill", FLOW_PAYABLE,
        bill_id, amount=amount, payment_date=payment_date,
        method=method, user=user, reference=reference, notes=notes,
    )


def _register_payment(
    company, doc_model, payment_model, doc_field, flow, document_id, *,
    amount, payment_date, method, user, reference, notes,
):
    user = ensure_authenticated(user, company)

    amount = Decimal(str(amount))
    if amount <= 0:
        raise ValidationError("Payment amount must be positive")

    def apply():
        # Lock the document row and re-read it
        # so the new totals are computed from committed state
        try:
            doc = (
                doc_model.objects.for_company(company)
                .select_for_update()
                .get(pk=document_id)
            )
        except doc_model.DoesNotExist:
            raise NotFoundError(
                f"{doc_model.__name__} {document_id} does not exist"
            )

        before = {"paid_amount": str(doc.paid_amount), "status": doc.status}
        changed_fields = doc.apply_payment(amount)

        payment = payment_model(
            company=company,
            amount=amount,
            payment_date=payment_date,
            method=method,
            reference=reference or "",
            notes=notes or "",
            created_by=user,
            **{doc_field: doc},
        )
        payment.save()
        doc.save(update_fields=changed_fields)

        log_action(
            action="apply_payment",
            instance=doc,
            user=user,
            changes={
                "payment_id": payment.pk,
                "amount": str(amount),
                "before": before,
                "after": {
                    "paid_amount": str(doc.paid_amount),
                    "balance": str(doc.balance),
                    "status": doc.status,
                },
            },
        )
        return doc, payment

    # document + payment + audit row commit together or not at all
    document, payment = run_in_transaction(apply)
    logger.info(
        "Applied %s %s to %s (balance %s, status %s)",
        payment_model.__name__, amount, document, document.balance,
        document.status,
    )

    result = PostingResult(document=document, payment=payment)

    # Bookkeeping runs after the commit and never undoes the payment
    try:
        result.entry = create_payment_journal(document, payment, flow, user=user)
    except Exception:
        logger.exception(
            "Payment %s %s was applied to %s but its journal entry "
            "could not be created",
            payment_model.__name__, payment.pk, document,
        )
        return result

    result.cash_movement = record_cash_movement(
        company,
        flow=flow,
        amount=payment.amount,
        concept=result.entry.description,
        date=payment.payment_date,
        reference=payment.reference,
        user=user,
        entry=result.entry,
    )
    return result
