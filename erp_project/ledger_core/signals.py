from django.core.exceptions import ValidationError
from django.db.models.signals import pre_delete
from django.dispatch import receiver

from .models import BillPayment, InvoicePayment, JournalEntry, JournalLine
from .models.journal import JOURNAL_POSTED

""" Model.delete() overrides do not run for QuerySet.delete();
    pre_delete fires for every collected row either way.

    Deleting a Company does not bypass these guards: books are kept.
    Its cascade already stops earlier on the PROTECT foreign keys of
    payments (-> invoice/bill) and documents (-> customer/vendor). """


# pre_delete signal auto-fires just before Django deletes a model instance
@receiver(pre_delete, sender=JournalEntry)
def prevent_delete_posted_journal(sender, instance, **kwargs):
    if instance.status == JOURNAL_POSTED:
        raise ValidationError("Cannot delete a posted journal entry.")


@receiver(pre_delete, sender=JournalLine)
def prevent_delete_posted_journal_line(sender, instance, **kwargs):
    if JournalEntry.objects.filter(
        pk=instance.journal_id, status=JOURNAL_POSTED
    ).exists():
        raise ValidationError(
            "Cannot delete JournalLine: parent JournalEntry is posted."
        )


"""Payment records are append-only."""


@receiver(pre_delete, sender=InvoicePayment)
@receiver(pre_delete, sender=BillPayment)
def prevent_delete_payment(sender, instance, **kwargs):
    raise ValidationError("Payment records cannot be deleted.")
