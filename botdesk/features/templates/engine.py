"""Placeholder substitution and extraction for message templates."""

import re
from dataclasses import dataclass
from typing import Mapping

# {{ identifier }} with optional whitespace inside the braces
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")


@dataclass(frozen=True)
class PreviewVariable:
    key: str
    label: str
    sample: str


PREVIEW_VARIABLES: tuple[PreviewVariable, ...] = (
    PreviewVariable("customer_name", "Customer Name", "John Smith"),
    PreviewVariable("customer_phone", "Customer Phone", "+1 (555) 123-4567"),
    PreviewVariable("customer_email", "Customer Email", "john@example.com"),
    PreviewVariable("order_id", "Order ID", "#12345"),
    PreviewVariable("order_status", "Order Status", "Shipped"),
    PreviewVariable("date", "Current Date", "March 15, 2024"),
    PreviewVariable("time", "Current Time", "2:30 PM"),
    PreviewVariable("business_name", "Business Name", "Your Company"),
)


def sample_bindings() -> dict[str, str]:
    """Map each preview variable to its sample value."""
    return {variable.key: variable.sample for variable in PREVIEW_VARIABLES}


def substitute(template: str, bindings: Mapping[str, str]) -> str:
    """
    Replace every bound placeholder with its value.

    Keys match case-sensitively; placeholders without a binding are left
    verbatim. Substituted values are not scanned again.

    Args:
        template: Template text
        bindings: Placeholder name to replacement value

    Returns:
        Rendered text
    """

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key in bindings:
            return str(bindings[key])
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_replace, template)


def extract_placeholders(template: str) -> list[str]:
    """Distinct placeholder names in first-seen order."""
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)
