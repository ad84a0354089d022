from __future__ import annotations

import textwrap

import pytest

from tracescope.analysis import (
    NameMismatch,
    ResolvedName,
    enclosing_chain,
    qualified_name_text,
    resolve_qualified_name,
)
from tracescope.scopes import CstScopeTreeProvider, PythonScopeTreeProvider, Scope, ScopeKind
from tracescope.scopes.model import module_scope


def _tree(source: str, provider=None) -> Scope:
    provider = provider or PythonScopeTreeProvider()
    tree = provider.parse(textwrap.dedent(source).lstrip("\n").encode("utf-8"), None)
    assert tree is not None
    return tree


_NESTED = """
class A:
    def b(self):
        def c():
            class D:
                def e(self): pass
            return D
        return c
"""


@pytest.mark.parametrize("provider", [PythonScopeTreeProvider(), CstScopeTreeProvider()])
def test_nested_class_and_function_chain(provider) -> None:
    result = resolve_qualified_name(_tree(_NESTED, provider), 5, "e")
    assert result == ResolvedName(("D.e", "c", "A.b"))
    assert result.text == "D.e in c in A.b"


def test_outer_scopes_of_nested_chain() -> None:
    tree = _tree(_NESTED)
    assert resolve_qualified_name(tree, 6, "c").text == "c in A.b"
    assert resolve_qualified_name(tree, 7, "b").text == "A.b"


def test_module_level_line_passes_name_through() -> None:
    tree = _tree(
        """
        import os

        f = os.getcwd()

        def g():
            return 1
        """
    )
    assert resolve_qualified_name(tree, 3, "f") == ResolvedName(("f",))
    assert qualified_name_text(resolve_qualified_name(tree, 3, "f"), "f") == "f"


def test_plain_function_and_method() -> None:
    tree = _tree(
        """
        def top():
            return 1

        class Service:
            def run(self):
                return 2
        """
    )
    assert resolve_qualified_name(tree, 2, "top").text == "top"
    assert resolve_qualified_name(tree, 6, "run").text == "Service.run"


def test_consecutive_classes_are_dotted() -> None:
    tree = _tree(
        """
        class Outer:
            class Inner:
                def method(self):
                    return 1
        """
    )
    assert resolve_qualified_name(tree, 4, "method").text == "Outer.Inner.method"


def test_function_nested_in_function_uses_in() -> None:
    tree = _tree(
        """
        def outer():
            def middle():
                def inner():
                    return 1
                return inner
            return middle
        """
    )
    assert resolve_qualified_name(tree, 4, "inner").text == "inner in middle in outer"


def test_async_functions_are_function_scopes() -> None:
    tree = _tree(
        """
        class Client:
            async def fetch(self):
                await self.session.get()
        """
    )
    assert resolve_qualified_name(tree, 3, "fetch").text == "Client.fetch"


def test_class_body_line_resolves_to_class_segment() -> None:
    tree = _tree(
        """
        def factory():
            class Outer:
                class K:
                    value = compute()
            return Outer
        """
    )
    assert resolve_qualified_name(tree, 4, "K").text == "Outer.K in factory"
    assert isinstance(resolve_qualified_name(tree, 4, "factory"), NameMismatch)


def test_innermost_name_mismatch_falls_back() -> None:
    tree = _tree(_NESTED)
    result = resolve_qualified_name(tree, 5, "renamed")
    assert result == NameMismatch(expected="renamed", found="e", line=5)
    assert qualified_name_text(result, "renamed") == "renamed"


def test_outer_function_names_are_not_checked() -> None:
    tree = _tree(_NESTED)
    # Only "e" is verified; "c" and "b" are trusted as found.
    assert resolve_qualified_name(tree, 5, "e").text == "D.e in c in A.b"


def test_line_past_end_of_file_is_module_level() -> None:
    tree = _tree(_NESTED)
    assert resolve_qualified_name(tree, 500, "e") == ResolvedName(("e",))


def test_same_named_siblings_resolve_by_position() -> None:
    tree = _tree(
        """
        class First:
            def handle(self):
                return 1

        class Second:
            def handle(self):
                return 2

        def handle():
            def handle():
                return 3
            return handle
        """
    )
    assert resolve_qualified_name(tree, 3, "handle").text == "First.handle"
    assert resolve_qualified_name(tree, 7, "handle").text == "Second.handle"
    assert resolve_qualified_name(tree, 11, "handle").text == "handle in handle"
    assert resolve_qualified_name(tree, 12, "handle").text == "handle"


def test_resolution_is_idempotent() -> None:
    tree = _tree(_NESTED)
    first = resolve_qualified_name(tree, 5, "e")
    second = resolve_qualified_name(tree, 5, "e")
    assert first == second
    assert first.text == second.text


def test_enclosing_chain_includes_root_outermost_first() -> None:
    tree = _tree(_NESTED)
    assert [scope.name for scope in enclosing_chain(tree, 5)] == [
        "<module>",
        "A",
        "b",
        "c",
        "D",
        "e",
    ]


def test_composition_stops_at_nested_module_scope() -> None:
    inner_function = Scope(ScopeKind.FUNCTION, "run", 3, 4)
    embedded = Scope(ScopeKind.MODULE, "embedded", 2, 5, (inner_function,))
    outer = Scope(ScopeKind.FUNCTION, "host", 1, 6, (embedded,))
    tree = module_scope([outer], end_line=6)
    assert resolve_qualified_name(tree, 3, "run").text == "run"


def test_empty_resolution_falls_back_to_bare_name() -> None:
    assert qualified_name_text(ResolvedName(()), "f") == "f"
