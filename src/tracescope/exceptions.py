"""Exception protocol markers for tracescope."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


class NeverRaise(RuntimeError):
    """Sentinel exception for code paths that should be unreachable.

    Raising this exception signals a programming error: a caller handed the
    library a value its own contracts rule out (for example an unknown parser
    id). Ordinary degradations while resolving frames never raise it.
    """

    def __init__(self, message: str, *, env: Mapping[str, object] | None = None):
        super().__init__(message)
        self.reason = message
        self.env: Mapping[str, object] = MappingProxyType(dict(env or {}))

    @property
    def env_dict(self) -> dict[str, object]:
        return {key: self.env[key] for key in sorted(self.env)}


class NeverThrown(NeverRaise):
    """Alias for NeverRaise used by the explicit never() marker."""
