from __future__ import annotations

from dataclasses import dataclass
from itertools import islice
from pathlib import Path
from typing import Optional
import json
import logging
import sys

import typer

from tracescope.config import (
    frames_default_version,
    frames_defaults,
    frames_parser,
    frames_resolve_names,
    merge_payload,
)
from tracescope.frames import StackFrame, parse_stack_frames, qualified_function_name
from tracescope.language_version import LanguageVersion, try_parse_version
from tracescope.schema import QualnameResponseDTO, StackFrameDTO, StackFramesResponseDTO
from tracescope.scopes.provider_contract import ScopeTreeProvider
from tracescope.scopes.registry import PROVIDER_IDS, provider_for
from tracescope.trace_text import split_version_tag

app = typer.Typer(add_completion=False)

_STDIN_ALIAS = "-"
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class FrameSettings:
    parser: str
    provider: ScopeTreeProvider
    resolve_names: bool
    default_version: LanguageVersion | None


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log why frames fall back to raw names."
    ),
) -> None:
    """Turn interpreter traces into qualified, navigable stack frames."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


def _provider_or_bad_parameter(parser: str) -> ScopeTreeProvider:
    if parser not in PROVIDER_IDS:
        raise typer.BadParameter(
            f"Unknown parser {parser!r}; expected one of: {', '.join(PROVIDER_IDS)}.",
            param_hint="--parser",
        )
    return provider_for(parser)


def _version_or_bad_parameter(text: str | None, *, param_hint: str) -> LanguageVersion | None:
    if text is None:
        return None
    version = try_parse_version(text)
    if version is None:
        raise typer.BadParameter(
            f"Expected a dotted version such as 3.11, got {text!r}.",
            param_hint=param_hint,
        )
    return version


def _frame_settings(
    *,
    parser: str | None,
    resolve: bool | None,
    root: Path | None,
    config: Path | None,
) -> FrameSettings:
    defaults = frames_defaults(root=root, config_path=config)
    merged = merge_payload({"parser": parser, "resolve_names": resolve}, defaults)
    parser_id = frames_parser(merged)
    return FrameSettings(
        parser=parser_id,
        provider=_provider_or_bad_parameter(parser_id),
        resolve_names=frames_resolve_names(merged),
        default_version=_version_or_bad_parameter(
            frames_default_version(merged),
            param_hint="[frames].default_version",
        ),
    )


def _read_trace(trace: Path | None) -> str:
    if trace is None or str(trace) == _STDIN_ALIAS:
        return sys.stdin.read()
    try:
        return trace.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read trace {trace}: {exc}") from exc


def _format_frame(frame: StackFrame) -> str:
    if frame.file is None:
        return frame.name
    return f"{frame.name}  ({frame.file}:{frame.line})"


@app.command("frames")
def frames(
    trace: Optional[Path] = typer.Argument(
        None, help="Trace text file; '-' or nothing reads stdin."
    ),
    parser: Optional[str] = typer.Option(
        None, "--parser", help=f"Scope parser: {', '.join(PROVIDER_IDS)}."
    ),
    resolve: Optional[bool] = typer.Option(
        None,
        "--resolve/--no-resolve",
        help="Resolve qualified names (default from config, else on).",
    ),
    limit: Optional[int] = typer.Option(
        None, "--limit", min=1, help="Stop after this many frames."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable JSON."),
    root: Optional[Path] = typer.Option(None, "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Print the frames of an interpreter trace with qualified names."""
    settings = _frame_settings(parser=parser, resolve=resolve, root=root, config=config)
    text = _read_trace(trace)
    stack = parse_stack_frames(
        text,
        provider=settings.provider,
        resolve_names=settings.resolve_names,
        default_version=settings.default_version,
    )
    if limit is not None:
        stack = islice(stack, limit)
    if not json_output:
        for frame in stack:
            typer.echo(_format_frame(frame))
        return
    version, _body = split_version_tag(text)
    version = version or settings.default_version
    response = StackFramesResponseDTO(
        parser=settings.parser,
        resolve_names=settings.resolve_names,
        version=str(version) if version is not None else None,
        frames=[
            StackFrameDTO(name=frame.name, file=frame.file, line=frame.line)
            for frame in stack
        ],
    )
    typer.echo(json.dumps(response.model_dump(), indent=2, sort_keys=True))


@app.command("qualname")
def qualname(
    path: Path = typer.Argument(..., help="Source file the frame executes in."),
    line: int = typer.Argument(..., min=0, help="1-based line of the frame."),
    name: str = typer.Argument(..., help="Function name reported by the interpreter."),
    python_version: Optional[str] = typer.Option(
        None, "--python-version", help="Grammar to parse with, e.g. 3.11."
    ),
    parser: Optional[str] = typer.Option(
        None, "--parser", help=f"Scope parser: {', '.join(PROVIDER_IDS)}."
    ),
    json_output: bool = typer.Option(False, "--json", help="Emit machine-readable JSON."),
    root: Optional[Path] = typer.Option(None, "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
) -> None:
    """Print the qualified name of a single frame."""
    settings = _frame_settings(parser=parser, resolve=None, root=root, config=config)
    version = (
        _version_or_bad_parameter(python_version, param_hint="--python-version")
        or settings.default_version
    )
    qualified = qualified_function_name(
        str(path),
        line,
        name,
        version,
        provider=settings.provider,
    )
    if not json_output:
        typer.echo(qualified)
        return
    response = QualnameResponseDTO(
        path=str(path),
        line=line,
        function=name,
        qualified_name=qualified,
        parser=settings.parser,
        version=str(version) if version is not None else None,
    )
    typer.echo(json.dumps(response.model_dump(), indent=2, sort_keys=True))
