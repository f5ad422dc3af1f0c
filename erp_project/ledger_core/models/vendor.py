from django.db import models
from ..managers import TenantManager
from .entitymembership import Company


class Vendor(models.Model):  # Mirrors Customer but for Accounts Payable (AP)

    # Multi-tenant
    company = models.ForeignKey(Company, on_delete=models.CASCADE)

    name = models.CharField(max_length=200)
    tax_id = models.CharField(max_length=32, blank=True)
    contact_email = models.EmailField(null=True, blank=True)
    payment_terms_days = models.IntegerField(default=30)
    is_active = models.BooleanField(default=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "name"], name="vendor_company_name_idx"),
        ]

        # Vendor names must be unique per company
        constraints = [
            models.UniqueConstraint(
                fields=["company", "name"], name="uq_company_vendor_name"
            ),
        ]

    def __str__(self):
        return self.name
