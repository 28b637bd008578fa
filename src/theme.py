"""Color & style helpers for the task menu.

Decisions:
- Only the completion marker and the list header are colored; the stored
  text and the strings returned by the stores never carry escape codes.
- Truecolor preferred; falls back to 256-color cube if unsupported.
- Disables automatically when not a TTY unless FORCE_COLOR=1.
- Honors NO_COLOR for complete disable (also via disable()).
- Supports palette overrides via environment or project .env file.
"""
from __future__ import annotations
import logging
import os, sys
from pathlib import Path

from models import DONE_MARKER, TODO_MARKER

logger = logging.getLogger(__name__)

_FORCE = os.environ.get("FORCE_COLOR", "").lower() in {"1", "true", "yes", "on"}
_NO_COLOR = os.environ.get("NO_COLOR") is not None
_ENABLE = (_FORCE or sys.stdout.isatty()) and not _NO_COLOR
_COLORTERM = os.environ.get("COLORTERM", "").lower()
_USE_TRUECOLOR = any(tok in _COLORTERM for tok in ("truecolor", "24bit"))

def _hex_to_rgb(hex_code: str) -> tuple[int,int,int]:
    h = hex_code.lstrip('#')
    return int(h[0:2],16), int(h[2:4],16), int(h[4:6],16)

def _fg_256(r: int, g: int, b: int) -> str:
    """Approximate RGB to xterm 256-color cube."""
    def to_6(x: int) -> int:
        return int(round(x / 255 * 5))
    idx = 16 + 36 * to_6(r) + 6 * to_6(g) + to_6(b)
    return f"\033[38;5;{idx}m"

def _from_hex(hex_code: str) -> str:
    r, g, b = _hex_to_rgb(hex_code)
    if _USE_TRUECOLOR:
        return f"\033[38;2;{r};{g};{b}m"
    return _fg_256(r, g, b)

def _valid_hex(value: str) -> bool:
    h = value.lstrip('#')
    return len(h) == 6 and all(c in '0123456789abcdefABCDEF' for c in h)

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"

HEX_HEADER_DEFAULT = '#476EAE'
HEX_TODO_DEFAULT = '#48B3AF'
HEX_DONE_DEFAULT = '#A7E399'
_KEYS = ('TASKS_HEADER_COLOR', 'TASKS_TODO_COLOR', 'TASKS_DONE_COLOR')

def load_env_overrides(env_path: Path) -> dict[str, str]:
    """Read palette overrides (KEY=#RRGGBB) from a .env file; bad lines are skipped."""
    overrides: dict[str, str] = {}
    if not env_path.exists():
        return overrides
    try:
        text = env_path.read_text(encoding='utf-8')
    except OSError as e:
        logger.warning("Ignoring unreadable %s: %s", env_path, e)
        return overrides
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        k, v = (part.strip() for part in line.split('=', 1))
        if k in _KEYS and _valid_hex(v):
            overrides[k] = '#' + v.lstrip('#')
    return overrides

_ENV_OVERRIDES = load_env_overrides(Path(__file__).resolve().parent.parent / '.env')

def _resolve(key: str, default: str) -> str:
    # priority: real env var > .env override > default
    value = os.environ.get(key)
    if value and _valid_hex(value):
        return value
    return _ENV_OVERRIDES.get(key, default)

HEADER_COLOR = _from_hex(_resolve('TASKS_HEADER_COLOR', HEX_HEADER_DEFAULT)) + BOLD
TODO_COLOR = _from_hex(_resolve('TASKS_TODO_COLOR', HEX_TODO_DEFAULT))
DONE_COLOR = _from_hex(_resolve('TASKS_DONE_COLOR', HEX_DONE_DEFAULT))
NUMBER_COLOR = DIM

def enabled() -> bool:
    return _ENABLE

def disable() -> None:
    """Turn coloring off for the rest of the process (--no-color)."""
    global _ENABLE
    _ENABLE = False

def color(text: str, *styles: str) -> str:
    """Apply ANSI styles to a given text."""
    if not _ENABLE:
        return text
    return ''.join(styles) + text + RESET

def color_entry(entry: str) -> str:
    """Color the leading completion marker of a store display string."""
    for marker, style in ((DONE_MARKER, DONE_COLOR), (TODO_MARKER, TODO_COLOR)):
        if entry.startswith(marker):
            return color(marker, style) + entry[len(marker):]
    return entry

__all__ = [
    'color', 'color_entry', 'disable', 'enabled', 'load_env_overrides',
    'RESET', 'BOLD', 'DIM', 'HEADER_COLOR', 'TODO_COLOR', 'DONE_COLOR', 'NUMBER_COLOR',
]
