from __future__ import annotations

import logging

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from tracescope.language_version import LanguageVersion
from tracescope.scopes.model import Scope, ScopeKind, module_scope

logger = logging.getLogger(__name__)


class _CstScopeCollector(cst.CSTVisitor):
    METADATA_DEPENDENCIES = (PositionProvider,)

    def __init__(self) -> None:
        super().__init__()
        self._levels: list[list[Scope]] = [[]]

    @property
    def scopes(self) -> tuple[Scope, ...]:
        return tuple(self._levels[0])

    def _leave_scope(self, node: cst.FunctionDef | cst.ClassDef, kind: ScopeKind) -> None:
        children = self._levels.pop()
        position = self.get_metadata(PositionProvider, node)
        self._levels[-1].append(
            Scope(
                kind=kind,
                name=node.name.value,
                start_line=position.start.line,
                end_line=position.end.line,
                children=tuple(children),
            )
        )

    def visit_FunctionDef(self, node: cst.FunctionDef) -> bool:
        self._levels.append([])
        return True

    def leave_FunctionDef(self, original_node: cst.FunctionDef) -> None:
        self._leave_scope(original_node, ScopeKind.FUNCTION)

    def visit_ClassDef(self, node: cst.ClassDef) -> bool:
        self._levels.append([])
        return True

    def leave_ClassDef(self, original_node: cst.ClassDef) -> None:
        self._leave_scope(original_node, ScopeKind.CLASS)


def _parser_config(version: LanguageVersion | None) -> cst.PartialParserConfig:
    if version is None:
        return cst.PartialParserConfig()
    try:
        return cst.PartialParserConfig(python_version=version.cst_version())
    except ValueError:
        logger.debug("libcst has no grammar for %s; using its default", version)
        return cst.PartialParserConfig()


class CstScopeTreeProvider:
    """Scope trees built with libcst and its syntactic position metadata."""

    provider_id = "libcst"

    def parse(self, source: bytes, version: LanguageVersion | None) -> Scope | None:
        try:
            module = cst.parse_module(source, config=_parser_config(version))
        except (cst.ParserSyntaxError, SyntaxError, ValueError, LookupError, RecursionError) as exc:
            logger.debug("libcst parse failed (version %s): %s", version, exc)
            return None
        collector = _CstScopeCollector()
        try:
            MetadataWrapper(module).visit(collector)
        except RecursionError as exc:
            logger.debug("libcst scope collection ran out of stack: %s", exc)
            return None
        return module_scope(collector.scopes, end_line=source.count(b"\n") + 1)
