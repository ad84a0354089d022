from .qualname import (
    NameMismatch,
    QualifiedNameResult,
    ResolvedName,
    enclosing_chain,
    qualified_name_text,
    resolve_qualified_name,
)

__all__ = [
    "NameMismatch",
    "QualifiedNameResult",
    "ResolvedName",
    "enclosing_chain",
    "qualified_name_text",
    "resolve_qualified_name",
]
