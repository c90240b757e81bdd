"""Closed set of icon kinds for results, actions and categories."""

from __future__ import annotations

from enum import StrEnum


class IconKind(StrEnum):
    """Visual kind of a palette entry, resolved to a glyph by the UI layer."""

    ALL = "all"
    CASE = "case"
    HELPER = "helper"
    REPORT = "report"
    BILLING = "billing"
    SERVICE = "service"
    CONTACT = "contact"
    CREATE = "create"
    SETTINGS = "settings"
    PROFILE = "profile"
    GENERIC = "generic"


# Icon keys emitted by the backend endpoint.
_BACKEND_ICON_KEYS: dict[str, IconKind] = {
    "SparklesIcon": IconKind.ALL,
    "ClipboardDocumentListIcon": IconKind.CASE,
    "UsersIcon": IconKind.HELPER,
    "DocumentTextIcon": IconKind.REPORT,
    "CurrencyEuroIcon": IconKind.BILLING,
    "ClockIcon": IconKind.SERVICE,
    "UserCircleIcon": IconKind.CONTACT,
    "PlusIcon": IconKind.CREATE,
    "CommandLineIcon": IconKind.SETTINGS,
}

_VALUES: dict[str, IconKind] = {kind.value: kind for kind in IconKind}


def parse_icon_kind(raw: str | IconKind | None) -> IconKind:
    """Map a raw icon key onto an IconKind.

    Accepts enum values ("case") and backend icon keys ("UsersIcon").
    Anything unknown maps to ``IconKind.GENERIC``.
    """
    if isinstance(raw, IconKind):
        return raw
    if not raw:
        return IconKind.GENERIC
    key = raw.strip()
    if key in _BACKEND_ICON_KEYS:
        return _BACKEND_ICON_KEYS[key]
    return _VALUES.get(key.lower(), IconKind.GENERIC)


def icon_kind_for_type(result_type: str) -> IconKind:
    """Derive an IconKind from a backend record type such as ``"case"``."""
    return _VALUES.get(result_type.strip().lower(), IconKind.GENERIC)
