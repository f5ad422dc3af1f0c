from django.conf import settings
from django.db import models
from ..managers import TenantManager


# ---------- Tenant / Company ----------
class Company(models.Model):

    """Tenant / Organization"""
    # Store company's full display name
    name = models.CharField(max_length=200)

    slug = models.SlugField(  # A URL-friendly identifier
        max_length=80, unique=True  # no two companies can have the same slug
    )

    # Link to a user account (creator or admin of company)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="owned_companies",
    )

    # Books are kept in a single functional currency
    currency_code = models.CharField(max_length=10, default="PEN")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name_plural = "companies"

    def __str__(self):
        return self.name


# ---------- EntityMembership ----------
class EntityMembership(
    models.Model
):  # Bridge table between User and Company

    ROLE_CHOICES = [
        # full control (e.g., the person who created the company)
        ("owner", "Owner"),
        # can manage settings & users
        ("admin", "Admin"),
        # can register payments and post journals
        ("accountant", "Accountant"),
        ("viewer", "Viewer"),  # read-only access
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="memberships",  # See all companies users belong to
    )

    company = models.ForeignKey(
        "Company", on_delete=models.CASCADE, related_name="memberships"
    )

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default="viewer",  # Defaults to "viewer" (safe, read-only)
    )

    # Suspend someone's access without deleting the record
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        # one user can only have one membership per company
        constraints = [
            models.UniqueConstraint(
                fields=["user", "company"], name="uq_user_company_membership"
            ),
        ]
        indexes = [
            models.Index(fields=["company", "user"], name="membership_company_user_idx"),
        ]

    def __str__(self):
        return f"{self.user} @ {self.company} ({self.role})"
