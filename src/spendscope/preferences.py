"""Support-tier preference, stored as a single string under a fixed key."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from spendscope.config import DEFAULT_TIER, TIER_PREFERENCE_KEY, TIERS


class PreferenceStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InMemoryPreferenceStore:
    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


def initial_tier(store: PreferenceStore) -> str:
    """Return the saved tier, storing the default when none (or an unknown one) is saved."""
    saved = store.get(TIER_PREFERENCE_KEY)
    if saved in TIERS:
        return saved
    store.set(TIER_PREFERENCE_KEY, DEFAULT_TIER)
    return DEFAULT_TIER


def select_tier(store: PreferenceStore, tier: str) -> str:
    if tier not in TIERS:
        raise ValueError(f"Unknown tier '{tier}'. Expected one of: {', '.join(TIERS)}")
    store.set(TIER_PREFERENCE_KEY, tier)
    return tier


class CookiePreferenceStore:
    """Preference store over request cookies; writes are applied to a response."""

    max_age_seconds = 60 * 60 * 24 * 365

    def __init__(self, cookies: Optional[Mapping[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(cookies or {})
        self._pending: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._pending[key] = value

    def apply(self, response: Any) -> None:
        for key, value in self._pending.items():
            response.set_cookie(key, value, max_age=self.max_age_seconds, samesite="lax")
        self._pending.clear()
