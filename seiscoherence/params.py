"""Command-line parameters given as ``name=value`` words or parameter files."""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import Callable, Iterable, Mapping, TypeVar

__all__ = ["ParameterError", "parse_args", "param"]

_T = TypeVar("_T")


class ParameterError(ValueError):
    """A parameter is malformed or a parameter file cannot be read."""


def _read_parfile(params: dict[str, str], path: str, seen: frozenset[str]) -> None:
    resolved = str(Path(path).resolve())
    if resolved in seen:
        raise ParameterError(f"parameter file {path} includes itself")
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ParameterError(f"cannot read parameter file {path}") from exc
    try:
        tokens = shlex.split(text, comments=True)
    except ValueError as exc:
        raise ParameterError(f"cannot parse parameter file {path}: {exc}") from exc
    for token in tokens:
        _assign(params, token, seen | {resolved})


def _assign(params: dict[str, str], token: str, seen: frozenset[str]) -> None:
    name, sep, value = token.partition("=")
    if not sep or not name:
        return
    if name == "par":
        _read_parfile(params, value, seen)
    else:
        params[name] = value


def parse_args(argv: Iterable[str]) -> dict[str, str]:
    """Collect ``name=value`` words into a mapping.

    ``par=file`` reads further ``name=value`` words from a file, where ``#``
    starts a comment.  Later values override earlier ones; words without an
    ``=`` are ignored.
    """
    params: dict[str, str] = {}
    for token in argv:
        _assign(params, token, frozenset())
    return params


def param(params: Mapping[str, str], name: str, convert: Callable[[str], _T], default: _T) -> _T:
    """Return ``convert(params[name])``, or ``default`` when the name is absent."""
    if name not in params:
        return default
    raw = params[name]
    try:
        return convert(raw)
    except (TypeError, ValueError) as exc:
        raise ParameterError(f"invalid value {raw!r} for parameter {name}") from exc