import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional

from fx_auth_reusables.authenticators.constants import (
    CONFIG_MAP_AUTHENTICATION_CACHE_EXPIRE_AFTER_ACCESS,
    CONFIG_MAP_AUTHENTICATION_CACHE_EXPIRE_AFTER_WRITE,
    CONFIG_MAP_AUTHENTICATION_CACHE_MAXIMUM_SIZE,
    CONFIG_MAP_AUTHENTICATION_CACHE_POLICY,
    DEFAULT_CACHE_POLICY,
    DURATION_UNIT_SECONDS,
    POLICY_ENTRY_SEPARATOR,
    POLICY_KEY_EXPIRE_AFTER_ACCESS,
    POLICY_KEY_EXPIRE_AFTER_WRITE,
    POLICY_KEY_MAXIMUM_SIZE,
    POLICY_KEY_VALUE_SEPARATOR,
)
from fx_auth_reusables.configmaps.interfaces.config_map_retriever_interface import IConfigMapRetriever

_DURATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)\s*([dhms]?)$")


@dataclass(frozen=True)
class CachingAuthenticatorSettings:
    """Cache policy for the caching authenticator.

    Consumed once, when the decorator is constructed.  A None field means
    "no bound" for that dimension.

    Attributes:
        maximum_size: Maximum number of resident principals (least recently used evicted first)
        expire_after_write: Seconds an entry may live after it was stored
        expire_after_access: Seconds an entry may stay unread before it is evicted
    """
    maximum_size: Optional[int] = None
    expire_after_write: Optional[float] = None
    expire_after_access: Optional[float] = None

    def __post_init__(self) -> None:
        if self.maximum_size is not None:
            if isinstance(self.maximum_size, bool) or not isinstance(self.maximum_size, int):
                raise ValueError(f"maximum_size must be an integer, got {self.maximum_size!r}")
            if self.maximum_size < 0:
                raise ValueError(f"maximum_size must not be negative, got {self.maximum_size}")
        for field_name in ("expire_after_write", "expire_after_access"):
            value = getattr(self, field_name)
            if value is not None and value < 0:
                raise ValueError(f"{field_name} must not be negative, got {value}")

    @staticmethod
    def parse(policy: str) -> "CachingAuthenticatorSettings":
        """Parse a policy string such as "maximumSize=1000,expireAfterAccess=10m".

        Durations take a d, h, m or s suffix; a bare number is read as seconds.
        An empty string yields an unbounded policy.

        Raises:
            ValueError: On unknown or repeated keys, or malformed values
        """
        values: Dict[str, str] = {}
        for raw_entry in policy.split(POLICY_ENTRY_SEPARATOR):
            entry: str = raw_entry.strip()
            if not entry:
                continue
            if POLICY_KEY_VALUE_SEPARATOR not in entry:
                raise ValueError(f'Cache policy entry "{entry}" is not of the form key=value')
            key, value = (part.strip() for part in entry.split(POLICY_KEY_VALUE_SEPARATOR, 1))
            if key not in (POLICY_KEY_MAXIMUM_SIZE, POLICY_KEY_EXPIRE_AFTER_WRITE, POLICY_KEY_EXPIRE_AFTER_ACCESS):
                raise ValueError(f'Unknown cache policy key "{key}"')
            if key in values:
                raise ValueError(f'Cache policy key "{key}" was already set')
            values[key] = value

        maximum_size: Optional[int] = None
        if POLICY_KEY_MAXIMUM_SIZE in values:
            maximum_size = CachingAuthenticatorSettings.parse_maximum_size(values[POLICY_KEY_MAXIMUM_SIZE])

        expire_after_write: Optional[float] = None
        if POLICY_KEY_EXPIRE_AFTER_WRITE in values:
            expire_after_write = CachingAuthenticatorSettings.parse_duration(values[POLICY_KEY_EXPIRE_AFTER_WRITE])

        expire_after_access: Optional[float] = None
        if POLICY_KEY_EXPIRE_AFTER_ACCESS in values:
            expire_after_access = CachingAuthenticatorSettings.parse_duration(values[POLICY_KEY_EXPIRE_AFTER_ACCESS])

        return CachingAuthenticatorSettings(
            maximum_size=maximum_size,
            expire_after_write=expire_after_write,
            expire_after_access=expire_after_access,
        )

    @staticmethod
    def parse_maximum_size(text: str) -> int:
        stripped: str = text.strip()
        if not stripped.isdigit():
            raise ValueError(f'Maximum size "{text}" is not a non-negative integer')
        return int(stripped)

    @staticmethod
    def parse_duration(text: str) -> float:
        """Convert "30s", "10m", "1h", "2d" or a bare number of seconds into seconds."""
        match = _DURATION_PATTERN.match(text.strip().lower())
        if match is None:
            raise ValueError(f'Duration "{text}" is not a number followed by one of d, h, m, s')
        amount: float = float(match.group(1))
        unit: str = match.group(2) or "s"
        return amount * DURATION_UNIT_SECONDS[unit]

    def to_policy_string(self) -> str:
        entries: List[str] = []
        if self.maximum_size is not None:
            entries.append(f"{POLICY_KEY_MAXIMUM_SIZE}={self.maximum_size}")
        if self.expire_after_write is not None:
            entries.append(f"{POLICY_KEY_EXPIRE_AFTER_WRITE}={self.expire_after_write:g}s")
        if self.expire_after_access is not None:
            entries.append(f"{POLICY_KEY_EXPIRE_AFTER_ACCESS}={self.expire_after_access:g}s")
        return POLICY_ENTRY_SEPARATOR.join(entries)

    @staticmethod
    def hydrate(config_map_retriever: IConfigMapRetriever) -> "CachingAuthenticatorSettings":
        """Hydrate settings from a config map retriever.

        A full policy string (AUTHENTICATION_CACHE_POLICY) wins.  Otherwise the
        individual AUTHENTICATION_CACHE_* values are used, and when none of them
        is set the default policy applies.
        """
        policy: Optional[str] = config_map_retriever.retrieve_optional_config_map_value(
            CONFIG_MAP_AUTHENTICATION_CACHE_POLICY
        )
        if policy is not None and policy.strip():
            logging.info("Authentication cache policy loaded from config: %s", policy)
            return CachingAuthenticatorSettings.parse(policy)

        maximum_size_str: Optional[str] = config_map_retriever.retrieve_optional_config_map_value(
            CONFIG_MAP_AUTHENTICATION_CACHE_MAXIMUM_SIZE
        )
        expire_after_write_str: Optional[str] = config_map_retriever.retrieve_optional_config_map_value(
            CONFIG_MAP_AUTHENTICATION_CACHE_EXPIRE_AFTER_WRITE
        )
        expire_after_access_str: Optional[str] = config_map_retriever.retrieve_optional_config_map_value(
            CONFIG_MAP_AUTHENTICATION_CACHE_EXPIRE_AFTER_ACCESS
        )

        if not any((maximum_size_str, expire_after_write_str, expire_after_access_str)):
            logging.info("Authentication cache policy using default: %s", DEFAULT_CACHE_POLICY)
            return CachingAuthenticatorSettings.parse(DEFAULT_CACHE_POLICY)

        return CachingAuthenticatorSettings(
            maximum_size=CachingAuthenticatorSettings.parse_maximum_size(maximum_size_str) if maximum_size_str else None,
            expire_after_write=CachingAuthenticatorSettings.parse_duration(expire_after_write_str) if expire_after_write_str else None,
            expire_after_access=CachingAuthenticatorSettings.parse_duration(expire_after_access_str) if expire_after_access_str else None,
        )
