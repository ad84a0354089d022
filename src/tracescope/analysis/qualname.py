"""Qualified function names for interpreter frames.

The interpreter reports only the bare name of the function a frame executes
in. Given this code::

    class A:
        def b(self):
            def c():
                class D:
                    def e(self):
                        pass

a frame at the ``pass`` line reported as ``e`` resolves to
``D.e in c in A.b``: each function opens a segment, the classes it is
directly defined in prefix it with dots, and segments are joined outward with
``in``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from tracescope.scopes.model import ScopeKind, ScopeNode

NESTING_SEPARATOR = " in "
MEMBER_SEPARATOR = "."


@dataclass(frozen=True)
class ResolvedName:
    parts: tuple[str, ...]

    @property
    def text(self) -> str:
        return NESTING_SEPARATOR.join(self.parts)


@dataclass(frozen=True)
class NameMismatch:
    """The scope found at the frame's line is not the one the trace names.

    This happens when the file on disk was edited after the trace was
    captured.
    """

    expected: str
    found: str
    line: int


QualifiedNameResult: TypeAlias = ResolvedName | NameMismatch


def enclosing_chain(tree: ScopeNode, line: int) -> list[ScopeNode]:
    """Return the scopes whose span contains ``line``, outermost first.

    The root is always included. Selection is by position only, so
    same-named siblings never shadow one another.
    """
    chain = [tree]
    current = tree
    while True:
        for child in current.children:
            if child.start_line <= line <= child.end_line:
                chain.append(child)
                current = child
                break
        else:
            return chain


def _compose(chain: list[ScopeNode]) -> tuple[str, ...]:
    parts: list[str] = []
    index = len(chain) - 1
    while index > 0 and chain[index].kind is not ScopeKind.MODULE:
        segment = [chain[index].name]
        index -= 1
        while index > 0 and chain[index].kind is ScopeKind.CLASS:
            segment.append(chain[index].name)
            index -= 1
        parts.append(MEMBER_SEPARATOR.join(reversed(segment)))
    return tuple(parts)


def resolve_qualified_name(
    tree: ScopeNode,
    line: int,
    function_name: str,
) -> QualifiedNameResult:
    chain = enclosing_chain(tree, line)
    innermost = chain[-1]
    if innermost.kind is ScopeKind.MODULE:
        return ResolvedName((function_name,))
    # Only the innermost scope is checked; the interpreter names nothing else.
    if innermost.name != function_name:
        return NameMismatch(expected=function_name, found=innermost.name, line=line)
    return ResolvedName(_compose(chain))


def qualified_name_text(result: QualifiedNameResult, function_name: str) -> str:
    if isinstance(result, ResolvedName) and result.text:
        return result.text
    return function_name
