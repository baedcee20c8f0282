"""Entry points for reading TSPLIB input from strings, bytes, files and paths."""

from .io import (
    build_params,
    load_config,
    parse_bytes,
    parse_file,
    parse_path,
    parse_str,
)

__all__ = [
    "build_params",
    "load_config",
    "parse_bytes",
    "parse_file",
    "parse_path",
    "parse_str",
]
