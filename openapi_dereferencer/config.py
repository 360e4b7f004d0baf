"""Runtime settings, read from `OPENAPI_DEREF_*` environment variables.

OPENAPI_DEREF_MAX_DEPTH      nesting limit for tree walks (unset = unbounded)
OPENAPI_DEREF_STRICT_PATHS   raise PathNotFoundError instead of warning
OPENAPI_DEREF_START_AT       default scope used by the UI
OPENAPI_DEREF_LOG_LEVEL      log level used by app.py
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

ENV_PREFIX = 'OPENAPI_DEREF_'

_TRUE = {'1', 'true', 'yes', 'on'}
_FALSE = {'0', 'false', 'no', 'off', ''}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_depth(name: str, raw: str) -> Optional[int]:
    raw = raw.strip()
    if not raw:
        return None
    try:
        depth = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if depth < 0:
        raise ValueError(f"{name} must not be negative, got {depth}")
    return depth


@dataclass(frozen=True)
class DereferenceSettings:
    max_depth: Optional[int] = None
    strict_paths: bool = False
    default_start_at: str = '$'
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'DereferenceSettings':
        env = os.environ if environ is None else environ
        defaults = cls()

        def get(name: str) -> Optional[str]:
            return env.get(ENV_PREFIX + name)

        max_depth = get('MAX_DEPTH')
        strict = get('STRICT_PATHS')
        return cls(
            max_depth=defaults.max_depth if max_depth is None else _parse_depth(ENV_PREFIX + 'MAX_DEPTH', max_depth),
            strict_paths=defaults.strict_paths if strict is None else _parse_bool(ENV_PREFIX + 'STRICT_PATHS', strict),
            default_start_at=(get('START_AT') or defaults.default_start_at).strip(),
            log_level=(get('LOG_LEVEL') or defaults.log_level).strip().upper(),
        )
