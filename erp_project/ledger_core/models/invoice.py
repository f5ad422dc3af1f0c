from django.db import models
from ..managers import TenantManager
from .customer import Customer
from .document import PaymentRecord, SourceDocument


class Invoice(SourceDocument):  # Represents a customer invoice (receivable)

    # prevent deleting customer who has an invoice
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        # Optimize for fast lookups by invoice number or customer
        indexes = [
            models.Index(fields=["company", "number"], name="invoice_company_number_idx"),
            models.Index(fields=["company", "customer"], name="invoice_company_customer_idx"),
            models.Index(fields=["company", "status"], name="invoice_company_status_idx"),
        ]

        constraints = [
            # Within one company, each invoice number must be unique
            # Across companies, duplicates are allowed
            models.UniqueConstraint(
                fields=["company", "number"],
                name="uq_invoice_company_number"
            )
        ]

    def __str__(self):
        return f"Invoice {self.number}"

    @property
    def counterparty(self):
        return self.customer if self.customer_id else None


class InvoicePayment(PaymentRecord):  # Collection received from a customer
    invoice = models.ForeignKey(
        Invoice, on_delete=models.PROTECT, related_name="payments"
    )

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "invoice"], name="invpay_company_invoice_idx"),
            models.Index(fields=["company", "payment_date"], name="invpay_company_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="invpay_positive_amount",
            ),
        ]

    def __str__(self):
        return f"Collection {self.amount} → {self.invoice.number}"

    @property
    def document(self):
        return self.invoice if self.invoice_id else None
