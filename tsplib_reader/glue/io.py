"""Input and configuration helpers around the decoder.

The decoder itself only sees an iterable of text lines; the helpers here turn
strings, bytes, open files and paths into one, translating read failures into
:class:`~tsplib_reader.errors.IoFailure`. Parser options can be kept in a
YAML or JSON file next to the instances they apply to.
"""

from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, TextIO, Union

import yaml

from ..config.config import DEFAULTS
from ..engine.dispatch import parse_lines
from ..errors import IoFailure
from ..logging.trace import ParseTrace
from ..model.problem import Problem

PathLike = Union[str, Path]


def load_config(path_yaml: PathLike) -> Dict:
    """Read a YAML (or JSON) configuration file.

    Parameters
    ----------
    path_yaml:
        Path to the configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Empty files resolve to ``{}``.
    """

    path = Path(path_yaml)
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}

    if path.suffix.lower() == ".json":
        return json.loads(text)

    cfg = yaml.safe_load(text)
    return cfg or {}


def build_params(cfg: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Merge parser options over :data:`DEFAULTS`.

    ``cfg`` is either the option mapping itself or a loaded configuration
    holding it under a ``parser`` key.
    """

    params = DEFAULTS.copy()
    if not cfg:
        return params
    options = cfg.get("parser", cfg)
    unknown = sorted(set(options) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"unknown parser option(s): {', '.join(unknown)}")
    params.update(options)
    return params


def parse_str(
    text: str,
    params: Optional[Mapping[str, Any]] = None,
    trace: Optional[ParseTrace] = None,
) -> Problem:
    """Parse TSPLIB text held in memory."""
    return parse_lines(io.StringIO(text, newline=None), build_params(params), trace)


def parse_bytes(
    data: bytes,
    params: Optional[Mapping[str, Any]] = None,
    trace: Optional[ParseTrace] = None,
) -> Problem:
    options = build_params(params)
    try:
        text = data.decode(options["encoding"])
    except UnicodeDecodeError as exc:
        raise IoFailure(f"cannot decode input as {options['encoding']}: {exc}") from exc
    return parse_lines(io.StringIO(text, newline=None), options, trace)


def parse_file(
    fh: TextIO,
    params: Optional[Mapping[str, Any]] = None,
    trace: Optional[ParseTrace] = None,
) -> Problem:
    """Parse from an open text file, reading it line by line."""

    options = build_params(params)
    try:
        return parse_lines(fh, options, trace)
    except (OSError, UnicodeDecodeError) as exc:
        raise IoFailure(f"read failed: {exc}") from exc


def parse_path(
    path: PathLike,
    params: Optional[Mapping[str, Any]] = None,
    trace: Optional[ParseTrace] = None,
) -> Problem:
    """Parse a TSPLIB file from disk."""

    options = build_params(params)
    path = Path(path)
    try:
        fh = path.open("r", encoding=options["encoding"], newline=None)
    except OSError as exc:
        raise IoFailure(f"cannot open {path}: {exc}") from exc
    with fh:
        try:
            return parse_lines(fh, options, trace)
        except (OSError, UnicodeDecodeError) as exc:
            raise IoFailure(f"read failed for {path}: {exc}") from exc


__all__ = [
    "build_params",
    "load_config",
    "parse_bytes",
    "parse_file",
    "parse_path",
    "parse_str",
]
