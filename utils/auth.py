"""Token-based access control for protected routes."""

from __future__ import annotations

from functools import wraps

from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from utils.errors import PermissionDenied


def current_user_id() -> int | None:
    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError):
        return None


def current_role() -> str | None:
    return get_jwt().get("role")


def role_required(*roles: str):
    """Require a valid access token, optionally restricted to ``roles``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            if roles and current_role() not in roles:
                raise PermissionDenied(
                    "This action requires one of the roles: {}.".format(", ".join(roles))
                )
            return view(*args, **kwargs)

        return wrapper

    return decorator


def ensure_same_user(claimed_user_id) -> int:
    """Return the caller's id, rejecting requests made on behalf of someone else."""

    user_id = current_user_id()
    if user_id is None:
        raise PermissionDenied("Token does not identify a user.")
    if claimed_user_id not in (None, ""):
        try:
            claimed = int(claimed_user_id)
        except (TypeError, ValueError):
            raise PermissionDenied("user_id does not match the authenticated user.")
        if claimed != user_id:
            raise PermissionDenied("user_id does not match the authenticated user.")
    return user_id
