from __future__ import annotations
import logging
import os
from typing import Optional

from sexplug.errors import SexplugConfigError

# Empty-pegs policies: what happens to a hole-free expression when the
# pegs plan enumerates nothing.
#   passthrough -> the expression is yielded unchanged
#   prime       -> a peg is pulled before the occurrence check, so the
#                  expression is dropped when there are no pegs
PASSTHROUGH = 'passthrough'
PRIME = 'prime'
POLICIES = (PASSTHROUGH, PRIME)

# Defaults
_DEFAULT_POLICY = PASSTHROUGH
_DEFAULT_LOG_LEVEL = 'WARNING'


def check_policy(policy: str) -> str:
    value = policy.strip().lower()
    if value not in POLICIES:
        raise SexplugConfigError(
            f"Unknown empty-pegs policy {policy!r}; expected one of {', '.join(POLICIES)}"
        )
    return value


def get_empty_pegs_policy(policy: Optional[str] = None) -> str:
    """An explicit policy wins over SEXPLUG_EMPTY_PEGS."""
    if policy is not None:
        return check_policy(policy)
    raw = os.environ.get('SEXPLUG_EMPTY_PEGS')
    if not raw or not raw.strip():
        return _DEFAULT_POLICY
    return check_policy(raw)


def get_log_level(level: Optional[str] = None) -> int:
    name = (level or os.environ.get('SEXPLUG_LOG_LEVEL') or _DEFAULT_LOG_LEVEL).strip().upper()
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise SexplugConfigError(f"Unknown log level {name!r}")
    return value
