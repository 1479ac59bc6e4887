"""Localized message catalogs."""

from policy_gate.infrastructure.messages.catalog import (
    MessageCatalog,
    MessageEntry,
    strip_code_prefix,
)

__all__ = ["MessageCatalog", "MessageEntry", "strip_code_prefix"]
