"""
Codecs for access cache keys and cached verdicts.

Keys look like ``<prefix>:<operation>:<subject>:<digest>``. The digest covers
the canonical JSON form of the whole triple with params sorted by name, so
two parameter mappings holding the same pairs always produce the same key
whatever order they were built in. Param values that compare equal in Python
(``True``, ``1`` and ``1.0``) share a key.

The operation and subject segments are only there for readability. They are
percent-encoded and truncated so keys stay within memcached's limits (no
whitespace or control characters, at most 250 bytes); the digest keeps keys
distinct when segments are cut.
"""

import hashlib
import json
from typing import Any, Mapping, Optional
from urllib.parse import quote

from .exceptions import VerdictDecodeError
from .types import AccessCheckRequest, Subject, canonical_subject

DEFAULT_KEY_PREFIX = "Auth.CachedAccessChecker"
KEY_SEPARATOR = ":"
MAX_SEGMENT_LENGTH = 48


def _readable_segment(value: str) -> str:
    return quote(value, safe="._-")[:MAX_SEGMENT_LENGTH]


def _canonical_value(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class CacheKeyCodec:
    """Derives deterministic cache keys for access checks."""

    def __init__(self, prefix: str = DEFAULT_KEY_PREFIX):
        self.prefix = prefix

    def encode(
        self,
        operation: str,
        subject: Subject,
        params: Optional[Mapping[str, Any]] = None,
    ) -> str:
        subject_key = canonical_subject(subject)
        payload = json.dumps(
            [
                operation,
                subject_key,
                {k: _canonical_value(v) for k, v in (params or {}).items()},
            ],
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=True,
        )
        digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()
        return KEY_SEPARATOR.join(
            (
                self.prefix,
                _readable_segment(operation),
                _readable_segment(subject_key),
                digest,
            )
        )

    def encode_request(self, request: AccessCheckRequest) -> str:
        return self.encode(request.operation, request.subject, request.params)


class VerdictCodec:
    """Serializes boolean verdicts to and from their cached form."""

    ALLOWED = "1"
    DENIED = "0"

    @classmethod
    def dumps(cls, allowed: bool) -> str:
        return cls.ALLOWED if allowed else cls.DENIED

    @classmethod
    def loads(cls, value: Any) -> bool:
        if isinstance(value, bytes):
            value = value.decode("ascii", errors="replace")
        if value == cls.ALLOWED:
            return True
        if value == cls.DENIED:
            return False
        raise VerdictDecodeError(f"Unrecognized cached verdict: {value!r}", value=value)


__all__ = ["CacheKeyCodec", "VerdictCodec", "DEFAULT_KEY_PREFIX"]
