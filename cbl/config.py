from __future__ import annotations
import logging
import os
from typing import Iterable, List
from urllib.parse import unquote, urlparse


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Defaults
_DEFAULT_EXTENSIONS = ['.cbl']
_DEFAULT_LOG_LEVEL = 'INFO'


def values_from_env(var: str, defaults: Iterable[str]) -> List[str]:
    raw = os.environ.get(var)
    if not raw:
        return list(defaults)
    sep = _sep()
    return [p.strip() for p in raw.split(sep) if p.strip()]


def get_file_extensions() -> List[str]:
    exts = values_from_env('CBL_FILE_EXTENSIONS', _DEFAULT_EXTENSIONS)
    # accept "cbl" as well as ".cbl"
    return [e.lower() if e.startswith('.') else '.' + e.lower() for e in exts]


def get_log_level() -> int:
    name = os.environ.get('CBL_LS_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def is_cbl_path(path_or_uri: str) -> bool:
    """True if a file path or file:// URI carries one of the configured extensions."""
    path = path_or_uri
    if '://' in path_or_uri:
        path = unquote(urlparse(path_or_uri).path)
    lowered = path.lower()
    return any(lowered.endswith(ext) for ext in get_file_extensions())
