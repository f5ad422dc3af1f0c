import logging
from celery import shared_task
from django.db.models import Exists, OuterRef

logger = logging.getLogger(__name__)


@shared_task  # register this function as a Celery task
def repost_missing_payment_entries(company_id):
    """
    Build the journal entries of payments that were applied
    but whose entry write failed afterwards.

    Operator-triggered; the payment workflow never enqueues it.
    """
    # import models lazily to avoid circular imports at module import time
    from .models import BillPayment, Company, InvoicePayment, JournalEntry
    from .services.ledger_accounts import FLOW_PAYABLE, FLOW_RECEIVABLE
    from .services.posting import SOURCE_TYPE_BY_FLOW, create_payment_journal
    from .services.treasury import record_cash_movement

    company = Company.objects.get(pk=company_id)
    sources = [
        (InvoicePayment, "invoice", "invoice__customer", FLOW_RECEIVABLE),
        (BillPayment, "bill", "bill__vendor", FLOW_PAYABLE),
    ]

    reposted = []
    for payment_model, doc_field, party_path, flow in sources:
        has_entry = JournalEntry.objects.filter(
            company=company,
            source_type=SOURCE_TYPE_BY_FLOW[flow],
            source_id=OuterRef("pk"),
        )
        missing = (
            payment_model.objects.for_company(company)
            .filter(~Exists(has_entry))
            .select_related(party_path)
            .order_by("pk")
        )
        for payment in missing:
            document = getattr(payment, doc_field)
            entry = create_payment_journal(
                document, payment, flow, user=payment.created_by
            )
            record_cash_movement(
                company,
                flow=flow,
                amount=payment.amount,
                concept=entry.description,
                date=payment.payment_date,
                reference=payment.reference,
                user=payment.created_by,
                entry=entry,
            )
            reposted.append(entry.number)

    logger.info(
        "Reposted %s missing payment entries for company %s",
        len(reposted), company_id,
    )
    return {"company_id": company_id, "reposted": reposted}
