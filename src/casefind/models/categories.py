"""Search category catalogue and role visibility rules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from casefind.models.kinds import IconKind

ALL_CATEGORY_ID = "all"


class Role(StrEnum):
    """Console roles supplied by the permission resolver."""

    ADMIN = "admin"
    HELPER = "helper"
    YOUTH_OFFICE = "youth_office"


@dataclass(frozen=True)
class Category:
    """One search scope shown as a chip in the palette header."""

    id: str
    name: str
    icon: IconKind
    color: str
    bg_color: str
    placeholder: str = ""
    roles: frozenset[str] | None = None

    def visible_to(self, role: str) -> bool:
        return self.roles is None or role in self.roles


CATEGORIES: tuple[Category, ...] = (
    Category(ALL_CATEGORY_ID, "All", IconKind.ALL, "#9333EA", "#FAF5FF"),
    Category(
        "cases",
        "Cases",
        IconKind.CASE,
        "#2563EB",
        "#EFF6FF",
        "Search cases (name, file number, school...)",
        frozenset({Role.ADMIN, Role.HELPER, Role.YOUTH_OFFICE}),
    ),
    Category(
        "helpers",
        "Helpers",
        IconKind.HELPER,
        "#16A34A",
        "#F0FDF4",
        "Search helpers (name, email, city...)",
        frozenset({Role.ADMIN}),
    ),
    Category(
        "reports",
        "Reports",
        IconKind.REPORT,
        "#9333EA",
        "#FAF5FF",
        "Search reports (title, content...)",
        frozenset({Role.ADMIN, Role.YOUTH_OFFICE}),
    ),
    Category(
        "billing",
        "Billing",
        IconKind.BILLING,
        "#CA8A04",
        "#FEFCE8",
        "Search invoices (invoice number...)",
        frozenset({Role.ADMIN, Role.YOUTH_OFFICE}),
    ),
    Category(
        "services",
        "Services",
        IconKind.SERVICE,
        "#4F46E5",
        "#EEF2FF",
        "Search services (location, note...)",
        frozenset({Role.HELPER}),
    ),
    Category(
        "contacts",
        "Contacts",
        IconKind.CONTACT,
        "#4B5563",
        "#F9FAFB",
        "Search contacts (name, youth office...)",
    ),
)
CATEGORY_BY_ID: dict[str, Category] = {item.id: item for item in CATEGORIES}


def categories_for_role(role: str) -> tuple[Category, ...]:
    """Return the categories visible to ``role`` in display order."""
    return tuple(item for item in CATEGORIES if item.visible_to(role))


def category_for_shortcut(role: str, digit: int) -> Category | None:
    """Map a 1-based digit shortcut onto the role-filtered category list."""
    visible = categories_for_role(role)
    if 1 <= digit <= len(visible):
        return visible[digit - 1]
    return None


def placeholder_for(category_id: str) -> str:
    if category_id == ALL_CATEGORY_ID:
        return "Search everything..."
    category = CATEGORY_BY_ID.get(category_id)
    return category.placeholder if category and category.placeholder else "Search..."
