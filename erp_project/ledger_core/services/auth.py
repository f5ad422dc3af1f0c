from ..exceptions import AuthenticationError
from ..models import EntityMembership

# Roles allowed to write to a company's books
WRITE_ROLES = ("owner", "admin", "accountant")


def get_current_user_id(user):
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    return user.pk


def ensure_authenticated(user, company):
    """
    Return `user` if it may write to `company`'s books,
    otherwise raise AuthenticationError.
    """
    if get_current_user_id(user) is None or not user.is_active:
        raise AuthenticationError("Could not authenticate the acting user.")

    # security: user must be an active member of that company
    is_member = EntityMembership.objects.for_company(company).filter(
        user=user, is_active=True, role__in=WRITE_ROLES
    ).exists()
    if not is_member:
        raise AuthenticationError(
            f"User {user} has no write access to {company}."
        )
    return user
