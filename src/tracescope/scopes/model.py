from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, Sequence, runtime_checkable


class ScopeKind(StrEnum):
    MODULE = "module"
    CLASS = "class"
    FUNCTION = "function"


@runtime_checkable
class ScopeNode(Protocol):
    """Read-only view of one lexical scope and the lines it spans.

    ``start_line`` and ``end_line`` are 1-based and inclusive. Children are
    ordered by position; their spans lie inside the parent's and never
    overlap one another.
    """

    @property
    def kind(self) -> ScopeKind: ...

    @property
    def name(self) -> str: ...

    @property
    def start_line(self) -> int: ...

    @property
    def end_line(self) -> int: ...

    @property
    def children(self) -> Sequence[ScopeNode]: ...


@dataclass(frozen=True)
class Scope:
    kind: ScopeKind
    name: str
    start_line: int
    end_line: int
    children: tuple[Scope, ...] = ()

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


def module_scope(children: Sequence[Scope], *, end_line: int) -> Scope:
    last = max([end_line, *(child.end_line for child in children)])
    return Scope(
        kind=ScopeKind.MODULE,
        name="<module>",
        start_line=1,
        end_line=max(last, 1),
        children=tuple(children),
    )
