"""In-memory localized message catalog.

Entries are immutable and built once per client surface. Lookups fall back
deterministically: requested language -> default language -> first
available language -> the code itself. Unknown codes resolve to the
catalog's fallback entry with found=False.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from policy_gate.application.interfaces.services import LocalizedMessage
from policy_gate.core.constants import DEFAULT_LANGUAGE

logger = logging.getLogger(__name__)

# Keys may be written as "[S2001]UNAUTHENTICATED"; clients only see the part after "]".
_CODE_PREFIX_RE = re.compile(r"^\[[^\]]*\]")


def strip_code_prefix(key: str) -> str:
    """'[S2001]UNAUTHENTICATED' -> 'UNAUTHENTICATED'; other keys unchanged."""
    return _CODE_PREFIX_RE.sub("", key, count=1)


@dataclass(frozen=True)
class MessageEntry:
    """Stable key plus text per language; templates take {placeholders} from error fields."""

    key: str
    texts: Mapping[str, str]
    templates: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", strip_code_prefix(self.key))
        object.__setattr__(self, "texts", MappingProxyType(dict(self.texts)))
        object.__setattr__(self, "templates", MappingProxyType(dict(self.templates)))

    def text_for(self, language: str, default_language: str) -> tuple[str | None, str]:
        """Return (text, language actually used) following the fallback order."""
        for candidate in (language, default_language):
            if candidate in self.texts:
                return self.texts[candidate], candidate
        for candidate, text in self.texts.items():
            return text, candidate
        return None, language

    def render(self, language: str, fields: Mapping[str, Any]) -> str | None:
        """Fill the template for language; None when absent or a placeholder is missing."""
        template = self.templates.get(language)
        if template is None:
            return None
        try:
            return template.format_map({k: v for k, v in fields.items() if v is not None})
        except (KeyError, IndexError, ValueError):
            return None


class MessageCatalog:
    """Code -> MessageEntry lookup with language fallback.

    Args:
        entries: Messages keyed by concrete code (e.g. "S2001").
        default_language: Used when the requested language has no text.
        fallback_code: Entry returned for unknown codes (e.g. the system error).
    """

    def __init__(
        self,
        entries: Mapping[str, MessageEntry],
        default_language: str = DEFAULT_LANGUAGE,
        fallback_code: str | None = None,
    ) -> None:
        self._entries: Mapping[str, MessageEntry] = MappingProxyType(dict(entries))
        self.default_language = default_language
        if fallback_code is not None and fallback_code not in self._entries:
            raise ValueError(f"Fallback code {fallback_code} has no catalog entry")
        self.fallback_code = fallback_code

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def codes(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def entry(self, code: str) -> MessageEntry | None:
        return self._entries.get(code)

    def lookup(
        self,
        code: str,
        language: str | None = None,
        fields: Mapping[str, Any] | None = None,
    ) -> LocalizedMessage:
        language = language or self.default_language
        entry = self._entries.get(code)
        found = entry is not None
        if entry is None and self.fallback_code is not None:
            entry = self._entries[self.fallback_code]
        if entry is None:
            return LocalizedMessage(code=code, key=code, text=code, language=language, found=False)

        text, used_language = entry.text_for(language, self.default_language)
        if found and fields:
            rendered = entry.render(used_language, fields)
            if rendered is not None:
                text = rendered
        if text is None:
            text = code
        return LocalizedMessage(
            code=code, key=entry.key, text=text, language=used_language, found=found
        )
