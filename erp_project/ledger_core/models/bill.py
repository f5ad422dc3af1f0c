from django.db import models
from ..managers import TenantManager
from .document import PaymentRecord, SourceDocument
from .vendor import Vendor


# ---------- Bills / BillPayments ----------

# Header represents vendor bill (Accounts Payable document)
class Bill(SourceDocument):
    # prevent deleting vendor who has a bill
    vendor = models.ForeignKey(Vendor, on_delete=models.PROTECT)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        # Optimize queries for "lookup by bill number"
        # or "all bills for this vendor."
        indexes = [
            models.Index(fields=["company", "number"], name="bill_company_number_idx"),
            models.Index(fields=["company", "vendor"], name="bill_company_vendor_idx"),
            models.Index(fields=["company", "status"], name="bill_company_status_idx"),
        ]

        constraints = [
            models.UniqueConstraint(
                fields=["company", "number"],
                name="uq_bill_company_number"
            )
        ]

    def __str__(self):
        return f"Bill {self.number}"

    @property
    def counterparty(self):
        return self.vendor if self.vendor_id else None


class BillPayment(PaymentRecord):  # Payment sent to a vendor
    bill = models.ForeignKey(
        Bill, on_delete=models.PROTECT, related_name="payments"
    )

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "bill"], name="billpay_company_bill_idx"),
            models.Index(fields=["company", "payment_date"], name="billpay_company_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="billpay_positive_amount",
            ),
        ]

    def __str__(self):
        return f"Payment {self.amount} → {self.bill.number}"

    @property
    def document(self):
        return self.bill if self.bill_id else None
