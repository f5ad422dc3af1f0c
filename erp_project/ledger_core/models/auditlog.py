from django.conf import settings
from django.db import models
from ..managers import TenantManager
from .entitymembership import Company


# ---------- Audit / Event log ----------
class AuditLog(
    models.Model
):  # Gives accountability and traceability across whole system
    # Nullable because some actions might not belong to a specific company
    company = models.ForeignKey(
        Company,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
    )
    # Which user performed the action
    # (Nullable in case the action was automated, e.g. a Celery task)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True, on_delete=models.SET_NULL,
        related_name="+",
    )
    # Common choices: create, update, apply_payment, post
    action = models.CharField(max_length=50)
    # What kind of object was affected (e.g., "Invoice", "JournalEntry")
    object_type = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    # Store details of what changed, in JSON format
    changes = models.JSONField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    # Enforce tenant scoping
    objects = TenantManager()

    class Meta:
        indexes = [
            models.Index(fields=["company", "user"], name="audit_company_user_idx"),
            models.Index(fields=["company", "created_at"], name="audit_company_created_idx"),
        ]

    def __str__(self):
        time = self.created_at
        return (
            f"[{time:%Y-%m-%d %H:%M}] {self.user} {self.action} "
            f"{self.object_type}({self.object_id})"
        )
