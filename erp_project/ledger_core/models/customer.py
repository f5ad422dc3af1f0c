from django.db import models
from ..managers import TenantManager
from .entitymembership import Company


# ---------- Customer ----------
# Represents client who receives invoices (AR side)
class Customer(models.Model):
    # Multi-tenant: every customer belongs to a single company.
    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    # The customer's legal or trade name
    name = models.CharField(max_length=200)
    # RUC / DNI / passport number
    tax_id = models.CharField(max_length=32, blank=True)
    contact_email = models.EmailField(null=True, blank=True)

    # Standard credit terms
    payment_terms_days = models.IntegerField(default=30)
    """ Example: If terms = 30 → invoice due 30 days after issue. """

    is_active = models.BooleanField(default=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "name"], name="customer_company_name_idx"),
        ]

        # Enforce uniqueness per tenant
        constraints = [
            models.UniqueConstraint(
                fields=["company", "name"], name="uq_company_customer_name"
            ),
        ]

    def __str__(self):
        return self.name
