"""
Authorization engines backed by ``django.contrib.auth``.
"""

import logging
from typing import Any, Mapping, Optional

from django.contrib.auth import get_user_model

from .types import Subject

logger = logging.getLogger(__name__)


class DjangoPermissionEngine:
    """
    Answers access checks with ``user.has_perm(operation)``.

    The subject is the user's primary key. Unknown and inactive users are
    denied. Params are not consulted; use a custom engine for rules that
    depend on them.
    """

    def __init__(self, user_model: Optional[type] = None):
        self._user_model = user_model

    @property
    def user_model(self) -> type:
        return self._user_model or get_user_model()

    def check_access(
        self, operation: str, subject: Subject, params: Mapping[str, Any]
    ) -> bool:
        user = self._get_user(subject)
        if user is None:
            logger.debug("Denying '%s' for unknown user %s", operation, subject)
            return False
        if not getattr(user, "is_active", True):
            return False
        return bool(user.has_perm(operation))

    def _get_user(self, subject: Subject):
        model = self.user_model
        try:
            return model._default_manager.get(pk=subject)
        except (model.DoesNotExist, ValueError, TypeError):
            return None


__all__ = ["DjangoPermissionEngine"]
