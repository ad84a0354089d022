from __future__ import annotations

from typing import Protocol, runtime_checkable

from tracescope.language_version import LanguageVersion
from tracescope.scopes.model import ScopeNode


@runtime_checkable
class ScopeTreeProvider(Protocol):
    provider_id: str

    def parse(
        self,
        source: bytes,
        version: LanguageVersion | None,
    ) -> ScopeNode | None: ...
