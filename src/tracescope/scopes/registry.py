from __future__ import annotations

from typing import Callable

from tracescope.invariants import never
from tracescope.scopes.cst_provider import CstScopeTreeProvider
from tracescope.scopes.provider_contract import ScopeTreeProvider
from tracescope.scopes.python_provider import PythonScopeTreeProvider


_PROVIDER_FACTORIES: dict[str, Callable[[], ScopeTreeProvider]] = {
    PythonScopeTreeProvider.provider_id: PythonScopeTreeProvider,
    CstScopeTreeProvider.provider_id: CstScopeTreeProvider,
}

PROVIDER_IDS: tuple[str, ...] = tuple(_PROVIDER_FACTORIES)


def provider_for(provider_id: str) -> ScopeTreeProvider:
    factory = _PROVIDER_FACTORIES.get(provider_id.strip().lower())
    if factory is None:
        never("unknown scope tree provider", provider_id=provider_id, known=PROVIDER_IDS)
    return factory()


def default_provider() -> ScopeTreeProvider:
    return PythonScopeTreeProvider()
