from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List

from lirs.types.macro_table import DEFAULT_MAX_EXPANSION_DEPTH


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Defaults
_DEFAULT_HISTORY_FILE = Path.home() / '.lirs_history.json'
_DEFAULT_HISTORY_SIZE = 1000
PRELUDE_SUFFIX = '.lirs'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default


def get_prelude_files() -> List[Path]:
    """Prelude sources from LIRS_PRELUDE_PATH; directories contribute their *.lirs files in name order."""
    files: List[Path] = []
    for p in paths_from_env('LIRS_PRELUDE_PATH', []):
        if p.is_dir():
            files.extend(sorted(p.glob(f'*{PRELUDE_SUFFIX}')))
        elif p.is_file():
            files.append(p)
    return files


def get_max_expansion_depth() -> int:
    return int_from_env('LIRS_MAX_EXPANSION_DEPTH', DEFAULT_MAX_EXPANSION_DEPTH)


def get_history_file() -> Path:
    return paths_from_env('LIRS_HISTORY_FILE', [_DEFAULT_HISTORY_FILE])[0]


def get_history_size() -> int:
    return int_from_env('LIRS_HISTORY_SIZE', _DEFAULT_HISTORY_SIZE)
