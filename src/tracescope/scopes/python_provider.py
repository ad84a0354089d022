from __future__ import annotations

import ast
import logging

from tracescope.language_version import LanguageVersion
from tracescope.scopes.model import Scope, ScopeKind, module_scope

logger = logging.getLogger(__name__)

# Nodes whose bodies can hold definitions.
_STATEMENT_NODES = (ast.stmt, ast.excepthandler, ast.match_case)


class ScopeCollector(ast.NodeVisitor):
    """Collect class and function definitions into nested Scope values.

    Only statements are walked: definitions nest inside statement bodies,
    never inside expressions, so expression trees of any depth are skipped.
    Decorators, defaults and base classes run in the enclosing scope and are
    never descended into.
    """

    def __init__(self) -> None:
        self._levels: list[list[Scope]] = [[]]

    def generic_visit(self, node: ast.AST) -> None:
        for child in ast.iter_child_nodes(node):
            if isinstance(child, _STATEMENT_NODES):
                self.visit(child)

    @property
    def scopes(self) -> tuple[Scope, ...]:
        return tuple(self._levels[0])

    def _visit_scope(
        self,
        node: ast.FunctionDef | ast.AsyncFunctionDef | ast.ClassDef,
        kind: ScopeKind,
    ) -> None:
        self._levels.append([])
        for stmt in node.body:
            self.visit(stmt)
        children = self._levels.pop()
        self._levels[-1].append(
            Scope(
                kind=kind,
                name=node.name,
                start_line=node.lineno,
                end_line=node.end_lineno or node.lineno,
                children=tuple(children),
            )
        )

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        self._visit_scope(node, ScopeKind.FUNCTION)

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        self._visit_scope(node, ScopeKind.FUNCTION)

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        self._visit_scope(node, ScopeKind.CLASS)


class PythonScopeTreeProvider:
    """Scope trees built with the standard library ``ast`` parser."""

    provider_id = "ast"

    def parse(self, source: bytes, version: LanguageVersion | None) -> Scope | None:
        feature_version = version.feature_version() if version is not None else None
        try:
            tree = ast.parse(source, feature_version=feature_version)
        except (SyntaxError, ValueError, RecursionError) as exc:
            logger.debug("ast parse failed (version %s): %s", version, exc)
            return None
        collector = ScopeCollector()
        try:
            collector.visit(tree)
        except RecursionError as exc:
            logger.debug("scope collection ran out of stack: %s", exc)
            return None
        return module_scope(collector.scopes, end_line=source.count(b"\n") + 1)
