from tracescope.scopes.model import Scope, ScopeKind, ScopeNode
from tracescope.scopes.provider_contract import ScopeTreeProvider
from .python_provider import PythonScopeTreeProvider, ScopeCollector
from .cst_provider import CstScopeTreeProvider
from .registry import PROVIDER_IDS, default_provider, provider_for

__all__ = [
    "CstScopeTreeProvider",
    "PROVIDER_IDS",
    "PythonScopeTreeProvider",
    "Scope",
    "ScopeCollector",
    "ScopeKind",
    "ScopeNode",
    "ScopeTreeProvider",
    "default_provider",
    "provider_for",
]
