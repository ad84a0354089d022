from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Protocol, runtime_checkable

from tracescope.analysis.qualname import (
    NameMismatch,
    qualified_name_text,
    resolve_qualified_name,
)
from tracescope.language_version import LanguageVersion
from tracescope.scopes.provider_contract import ScopeTreeProvider
from tracescope.scopes.registry import default_provider
from tracescope.trace_text import RawFrame, iter_raw_frames, split_version_tag

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StackFrame:
    """One frame ready for display.

    ``file`` and ``line`` are ``None`` for frames whose file does not exist,
    such as ``<frozen importlib._bootstrap>``; their name is always the raw
    function name.
    """

    name: str
    file: str | None = None
    line: int | None = None


@runtime_checkable
class FileSystem(Protocol):
    def exists(self, path: str) -> bool: ...

    def read_bytes(self, path: str) -> bytes | None: ...


class LocalFileSystem:
    def exists(self, path: str) -> bool:
        try:
            return Path(path).is_file()
        except (OSError, ValueError) as exc:
            # ENAMETOOLONG and EACCES escape is_file() on older interpreters.
            logger.debug("cannot stat %s: %s", path, exc)
            return False

    def read_bytes(self, path: str) -> bytes | None:
        try:
            with Path(path).open("rb") as handle:
                return handle.read()
        except (OSError, ValueError) as exc:
            logger.debug("could not read %s: %s", path, exc)
            return None


def _resolve_frame_name(
    frame: RawFrame,
    version: LanguageVersion | None,
    *,
    provider: ScopeTreeProvider,
    filesystem: FileSystem,
) -> str:
    source = filesystem.read_bytes(frame.file)
    if source is None:
        return frame.function
    tree = provider.parse(source, version)
    if tree is None:
        logger.debug("no scope tree for %s; keeping %r", frame.file, frame.function)
        return frame.function
    result = resolve_qualified_name(tree, frame.line, frame.function)
    if isinstance(result, NameMismatch):
        logger.debug(
            "%s:%d is inside %r, trace reports %r; keeping the raw name",
            frame.file,
            result.line,
            result.found,
            result.expected,
        )
    return qualified_name_text(result, frame.function)


def qualified_function_name(
    path: str,
    line: int,
    function_name: str,
    version: LanguageVersion | None = None,
    *,
    provider: ScopeTreeProvider | None = None,
    filesystem: FileSystem | None = None,
) -> str:
    """Qualified name of ``function_name`` executing at ``path:line``.

    Falls back to ``function_name`` when the file cannot be read or parsed,
    or no longer matches the name the interpreter reported.
    """
    return _resolve_frame_name(
        RawFrame(file=path, line=line, function=function_name),
        version,
        provider=provider or default_provider(),
        filesystem=filesystem or LocalFileSystem(),
    )


def parse_stack_frames(
    trace_text: str,
    *,
    provider: ScopeTreeProvider | None = None,
    filesystem: FileSystem | None = None,
    resolve_names: bool = True,
    default_version: LanguageVersion | None = None,
) -> Iterator[StackFrame]:
    """Yield the frames of ``trace_text`` in order, resolving names lazily.

    Each file is read and parsed only when its frame is pulled, so a caller
    that stops iterating early never touches the remaining files.
    """
    version, body = split_version_tag(trace_text)
    if version is None:
        version = default_version
    provider = provider or default_provider()
    filesystem = filesystem or LocalFileSystem()
    for frame in iter_raw_frames(body):
        if not filesystem.exists(frame.file):
            yield StackFrame(name=frame.function)
            continue
        name = frame.function
        if resolve_names:
            name = _resolve_frame_name(
                frame,
                version,
                provider=provider,
                filesystem=filesystem,
            )
        yield StackFrame(name=name, file=frame.file, line=frame.line)
