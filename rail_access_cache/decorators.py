"""
Access check decorators for Django views.
"""

from functools import wraps
from typing import Any, Callable, Mapping, Optional, Union

from django.core.exceptions import PermissionDenied

from .checker import CachedAccessChecker

ParamsSource = Union[Mapping[str, Any], Callable[..., Mapping[str, Any]], None]

_default_checker: Optional[CachedAccessChecker] = None


def get_default_checker() -> CachedAccessChecker:
    """Lazily build the settings-driven checker over ``DjangoPermissionEngine``."""
    global _default_checker
    if _default_checker is None:
        from .checker import build_access_checker
        from .engines import DjangoPermissionEngine

        _default_checker = build_access_checker(DjangoPermissionEngine())
    return _default_checker


def reset_default_checker() -> None:
    global _default_checker
    _default_checker = None


def require_access(
    operation: str,
    checker: Optional[CachedAccessChecker] = None,
    params: ParamsSource = None,
    allow_caching: bool = True,
):
    """
    Decorator requiring the request user to pass an access check.

    Args:
        operation: Operation name to check.
        checker: Checker to use. Defaults to ``get_default_checker()``.
        params: Mapping, or callable ``(request, *args, **kwargs)`` returning one.
        allow_caching: Passed through to ``check_access``.

    Raises:
        PermissionDenied: If the user is anonymous or the check is denied.
    """

    def decorator(view_func: Callable) -> Callable:
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            user = getattr(request, "user", None)
            if not user or not getattr(user, "is_authenticated", False):
                raise PermissionDenied("Authentication required")
            if getattr(user, "pk", None) is None:
                raise PermissionDenied("Authentication required")

            subject = user.pk if isinstance(user.pk, int) else str(user.pk)
            check_params = params(request, *args, **kwargs) if callable(params) else params
            active_checker = checker or get_default_checker()
            if not active_checker.check_access(
                operation, subject, check_params, allow_caching=allow_caching
            ):
                raise PermissionDenied(f"Access denied: {operation}")
            return view_func(request, *args, **kwargs)

        return wrapper

    return decorator


__all__ = ["require_access", "get_default_checker", "reset_default_checker"]
