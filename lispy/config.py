from __future__ import annotations
import os
from pathlib import Path

from lispy.errors import LispyConfigError


_DEFAULT_PROMPT = 'lispy> '
_DEFAULT_HISTORY_FILE = Path('~/.lispy_history')
_DEFAULT_HISTORY_LENGTH = 1000
_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_RECURSION_LIMIT = 20000


def get_prompt() -> str:
    return os.environ.get('LISPY_PROMPT', _DEFAULT_PROMPT)


def get_history_file() -> Path | None:
    # An explicitly empty value disables history persistence
    raw = os.environ.get('LISPY_HISTORY_FILE')
    if raw is None:
        return _DEFAULT_HISTORY_FILE.expanduser()
    raw = raw.strip()
    return Path(raw).expanduser() if raw else None


def get_history_length() -> int:
    raw = os.environ.get('LISPY_HISTORY_LENGTH')
    if not raw:
        return _DEFAULT_HISTORY_LENGTH
    try:
        return int(raw)
    except ValueError:
        raise LispyConfigError(f'LISPY_HISTORY_LENGTH must be an integer, got {raw!r}') from None


def get_log_level() -> str:
    level = os.environ.get('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    if level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        raise LispyConfigError(f'LISPY_LOG_LEVEL must be a logging level name, got {level!r}')
    return level


def get_recursion_limit() -> int:
    raw = os.environ.get('LISPY_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        raise LispyConfigError(f'LISPY_RECURSION_LIMIT must be an integer, got {raw!r}') from None
    if limit < 1000:
        raise LispyConfigError(f'LISPY_RECURSION_LIMIT must be at least 1000, got {limit}')
    return limit
