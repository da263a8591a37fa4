# shared/common/cache.py
"""
Cache-backed Utilities

Token blacklist stored in the Django cache (django-redis in production).
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone
from django.utils.module_loading import import_string

from .constants import TOKEN_BLACKLIST_PREFIX

logger = logging.getLogger(__name__)


class TokenBlacklist(ABC):
    """Revoked access tokens, kept until the token would expire anyway."""

    @abstractmethod
    def add(self, token: str, expires_at: datetime) -> bool:
        ...

    @abstractmethod
    def is_blacklisted(self, token: str) -> bool:
        ...


class CacheTokenBlacklist(TokenBlacklist):
    """
    Blacklist using the default Django cache.
    Entries are keyed ``bl_<token>`` with a TTL equal to the token's remaining lifetime.
    """

    def __init__(self, backend=None, prefix: str = TOKEN_BLACKLIST_PREFIX):
        self.cache = backend or cache
        self.prefix = prefix

    def _key(self, token: str) -> str:
        return f"{self.prefix}{token}"

    def add(self, token: str, expires_at: datetime) -> bool:
        ttl = int((expires_at - timezone.now()).total_seconds())
        if ttl <= 0:
            # Already expired, JWT validation rejects it on its own
            return False

        self.cache.set(self._key(token), '1', timeout=ttl)
        logger.info("Token blacklisted", extra={'ttl_seconds': ttl})
        return True

    def is_blacklisted(self, token: str) -> bool:
        return self.cache.get(self._key(token)) == '1'


_blacklist: Optional[TokenBlacklist] = None


def get_token_blacklist() -> TokenBlacklist:
    """Return the blacklist configured by ``TOKEN_BLACKLIST_CLASS``."""
    global _blacklist
    if _blacklist is None:
        path = getattr(settings, 'TOKEN_BLACKLIST_CLASS', 'shared.common.cache.CacheTokenBlacklist')
        _blacklist = import_string(path)()
    return _blacklist


def set_token_blacklist(blacklist: Optional[TokenBlacklist]) -> None:
    """Replace the process-wide blacklist (``None`` resets to the configured class)."""
    global _blacklist
    _blacklist = blacklist
