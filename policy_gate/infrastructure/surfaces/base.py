"""Client surface profile: everything that differs between web, admin and mobile.

One pipeline implementation serves every surface; the profile supplies the
concrete taxonomy codes, role defaults, permission registry, message
catalogs and storage-constraint remapping.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from policy_gate.application.services.permission_service import PermissionRegistry
from policy_gate.application.services.role_service import RolePermissionTable
from policy_gate.core.constants import SUPPORTED_LANGUAGES
from policy_gate.domain.enums import ClientSurface, ErrorKind
from policy_gate.infrastructure.messages.catalog import MessageCatalog, MessageEntry


def message(
    key: str,
    vi: str,
    en: str,
    ko: str,
    templates: Mapping[str, str] | None = None,
) -> MessageEntry:
    """Shorthand for a three-language catalog entry."""
    return MessageEntry(key=key, texts={"vi": vi, "en": en, "ko": ko}, templates=templates or {})


@dataclass(frozen=True)
class SurfaceProfile:
    """Immutable per-surface configuration, built once at import."""

    surface: ClientSurface
    prefix: str
    codes: Mapping[ErrorKind, str]
    role_table: RolePermissionTable
    permission_registry: PermissionRegistry
    error_catalog: MessageCatalog
    success_catalog: MessageCatalog
    constraints: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [kind.value for kind in ErrorKind if kind not in self.codes]
        if missing:
            raise ValueError(f"{self.surface.value} profile lacks codes for: {', '.join(missing)}")
        for kind, code in self.codes.items():
            if not code.startswith(self.prefix):
                raise ValueError(f"{kind.value} code {code} does not use prefix {self.prefix}")
            if code not in self.error_catalog:
                raise ValueError(f"{kind.value} code {code} has no catalog entry")
        for entry_code in self.error_catalog.codes():
            entry = self.error_catalog.entry(entry_code)
            absent = [lang for lang in SUPPORTED_LANGUAGES if entry and lang not in entry.texts]
            if absent:
                raise ValueError(f"{entry_code} lacks texts for: {', '.join(absent)}")

    def code_for(self, kind: ErrorKind) -> str:
        return self.codes[kind]
