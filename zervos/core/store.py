"""
SafeStore - fault-tolerant JSON persistence over a Medium.

No method raises. Reads resolve to the caller's fallback on absence,
corruption or medium failure; writes report success as a bool. Every absorbed
failure is written to the diagnostic log.
"""

import json
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

from .medium import Medium, MemoryMedium

from util.logging import logger

T = TypeVar("T")

STATUS_OK = "ok"
STATUS_ABSENT = "absent"
STATUS_MALFORMED = "malformed"
STATUS_UNAVAILABLE = "unavailable"


@dataclass
class ReadResult(Generic[T]):
    """Typed outcome of a read: the value plus how it was obtained."""
    value: T
    status: str = STATUS_OK

    @property
    def used_fallback(self) -> bool:
        return self.status != STATUS_OK


def encode_value(value: Any) -> str:
    """Canonical text form of a record."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class SafeStore:
    """Never-raising get/set/remove/clear over a persistence medium."""

    def __init__(self, medium: Optional[Medium] = None):
        self.medium = medium if medium is not None else MemoryMedium()

    def read(self, key: str, fallback: T) -> ReadResult[T]:
        """Read key and report whether the fallback was used."""
        try:
            raw = self.medium.get_item(key)
        except Exception as e:
            logger.log_store_failure("get", key, e, kind=STATUS_UNAVAILABLE)
            return ReadResult(fallback, STATUS_UNAVAILABLE)

        if not raw:
            return ReadResult(fallback, STATUS_ABSENT)

        try:
            parsed = json.loads(raw)
        except (ValueError, TypeError, RecursionError) as e:
            # Corrupt record stays in place until a valid write replaces it
            logger.log_store_failure("parse", key, e, kind=STATUS_MALFORMED)
            return ReadResult(fallback, STATUS_MALFORMED)

        if parsed is None:
            return ReadResult(fallback, STATUS_ABSENT)
        return ReadResult(parsed, STATUS_OK)

    def get(self, key: str, fallback: T) -> T:
        """Return the parsed record under key, or fallback."""
        return self.read(key, fallback).value

    def set(self, key: str, value: Any) -> bool:
        """Serialize value and store it under key."""
        try:
            text = encode_value(value)
        except (TypeError, ValueError, RecursionError) as e:
            logger.log_store_failure("encode", key, e, kind="unserializable")
            return False

        try:
            self.medium.set_item(key, text)
            return True
        except Exception as e:
            logger.log_store_failure("set", key, e, kind=STATUS_UNAVAILABLE)
            return False

    def remove(self, key: str) -> bool:
        """Best-effort removal of key."""
        try:
            self.medium.remove_item(key)
            return True
        except Exception as e:
            logger.log_store_failure("remove", key, e, kind=STATUS_UNAVAILABLE)
            return False

    def clear(self) -> bool:
        """Best-effort removal of every key."""
        try:
            self.medium.clear()
            return True
        except Exception as e:
            logger.log_store_failure("clear", error=e, kind=STATUS_UNAVAILABLE)
            return False

    def keys(self, prefix: str = "") -> List[str]:
        """List stored keys starting with prefix, [] when the medium fails."""
        try:
            return [k for k in self.medium.keys() if k.startswith(prefix)]
        except Exception as e:
            logger.log_store_failure("keys", error=e, kind=STATUS_UNAVAILABLE)
            return []

    def get_raw(self, key: str) -> Optional[str]:
        """Raw text under key, None when absent or unreadable."""
        try:
            return self.medium.get_item(key)
        except Exception as e:
            logger.log_store_failure("get", key, e, kind=STATUS_UNAVAILABLE)
            return None
