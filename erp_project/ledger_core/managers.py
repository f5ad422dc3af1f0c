from django.db import models


# -----------------------------------------
# Enforce tenant scoping across all models
# that belong to a company
# -----------------------------------------
class TenantQuerySet(models.QuerySet):
    def for_company(self, company):
        return self.filter(company=company)

    def active(self, company):
        return self.filter(
            company=company,  # enforce tenant scoping
            is_active=True,  # only fetch active records
        )
    # Enables query:
    # BankAccount.objects.active(company)


# Attach TenantQuerySet to .objects
class TenantManager(models.Manager):

    # ensure every model gets TenantQuerySet
    # (so .for_company() is always available)
    def get_queryset(self):
        return TenantQuerySet(self.model, using=self._db)

    def for_company(self, company):
        return self.get_queryset().for_company(company)

    def active(self, company):
        return self.get_queryset().active(company)
