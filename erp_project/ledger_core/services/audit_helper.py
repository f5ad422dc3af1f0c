from typing import Optional
from ..models import AuditLog, Company


def log_action(
    *,
    action: str,
    instance,
    user=None,
    company: Optional[Company] = None,
    changes: dict | None = None,
):
    """
    Central audit logger.
    Runs inside the caller's transaction, so the log row
    commits or rolls back together with the change it records.
    """

    if not company:
        company = getattr(instance, "company", None)

    return AuditLog.objects.create(
        company=company,
        user=user,
        action=action,
        object_type=instance.__class__.__name__,
        object_id=str(instance.pk),
        changes=changes,
    )
