"""Role-specific quick actions shown in the empty palette."""

from __future__ import annotations

from dataclasses import dataclass

from casefind.models.categories import Role
from casefind.models.kinds import IconKind


@dataclass(frozen=True)
class QuickAction:
    """A shortcut entry that navigates straight to a page."""

    name: str
    href: str
    icon: IconKind
    shortcut: str
    description: str
    roles: frozenset[str]

    @property
    def id(self) -> str:
        return f"action:{self.href}"


_ADMIN = frozenset({Role.ADMIN})
_HELPER = frozenset({Role.HELPER})
_YOUTH_OFFICE = frozenset({Role.YOUTH_OFFICE})

QUICK_ACTIONS: tuple[QuickAction, ...] = (
    QuickAction("Create new case", "/cases/new", IconKind.CREATE, "N", "Open a new case", _ADMIN),
    QuickAction("Add helper", "/helpers/new", IconKind.HELPER, "H", "Register a helper", _ADMIN),
    QuickAction("Show all cases", "/cases", IconKind.CASE, "F", "Open the case overview", _ADMIN),
    QuickAction("Settings", "/settings", IconKind.SETTINGS, "S", "System settings", _ADMIN),
    QuickAction("My cases", "/cases", IconKind.CASE, "F", "Show assigned cases", _HELPER),
    QuickAction("Record service", "/services/new", IconKind.SERVICE, "S", "Log a service", _HELPER),
    QuickAction("My profile", "/profile", IconKind.PROFILE, "P", "Edit profile", _HELPER),
    QuickAction("Our cases", "/cases", IconKind.CASE, "F", "Show all cases", _YOUTH_OFFICE),
    QuickAction("View reports", "/reports", IconKind.REPORT, "B", "Reports", _YOUTH_OFFICE),
    QuickAction("Billing", "/billing", IconKind.BILLING, "A", "Invoices and approvals", _YOUTH_OFFICE),
)


def quick_actions_for_role(role: str) -> tuple[QuickAction, ...]:
    """Return the quick actions available to ``role``."""
    return tuple(action for action in QUICK_ACTIONS if role in action.roles)
