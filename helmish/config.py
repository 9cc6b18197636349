"""
Run configuration.

Options come from CLI flags, then environment variables, then defaults.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Mapping, Optional

from .types import Capabilities, Profile, RunOptions

ENV_CHART_PATH = "HELMISH_CHART_PATH"
ENV_PROFILE = "HELMISH_PROFILE"
ENV_WORKERS = "HELMISH_WORKERS"
ENV_DEBUG = "HELMISH_DEBUG"

DEFAULT_CHART_PATH = "/default/chart/path"
DEFAULT_PROFILE = "default"
DEFAULT_WORKERS = 4

_LOG = logging.getLogger("helmish")


def setup_logging(verbose: bool = False, env: Optional[Mapping[str, str]] = None) -> None:
    """
    Configures the package logger once: stderr, ``[LEVEL] message``.
    DEBUG with --verbose or HELMISH_DEBUG, WARNING otherwise.
    """
    env = os.environ if env is None else env
    level = logging.DEBUG if verbose or env.get(ENV_DEBUG) else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


def _pick(flag: Any, env: Mapping[str, str], name: str, default: Any) -> Any:
    # flag > env > default
    if flag not in (None, ""):
        return flag
    value = env.get(name)
    if value:
        return value
    return default


def resolve_options(ns: Any, env: Optional[Mapping[str, str]] = None) -> RunOptions:
    """
    Builds RunOptions from parsed CLI arguments and the environment.

    Raises:
        ValueError: On an invalid worker count or timeout
    """
    env = os.environ if env is None else env

    chart_path = _pick(getattr(ns, "chart_path", None), env, ENV_CHART_PATH, DEFAULT_CHART_PATH)
    profile = _pick(getattr(ns, "profile", None), env, ENV_PROFILE, DEFAULT_PROFILE)
    workers_raw = _pick(getattr(ns, "workers", None), env, ENV_WORKERS, DEFAULT_WORKERS)
    try:
        workers = int(workers_raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid worker count '{workers_raw}'")
    if workers < 1:
        raise ValueError(f"Worker count must be positive, got {workers}")

    timeout = getattr(ns, "timeout", None)
    if timeout is not None and timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {timeout}")

    return RunOptions(
        chart_path=Path(chart_path),
        profile=str(profile),
        values_files=tuple(Path(p) for p in (getattr(ns, "values", None) or [])),
        set_values=tuple(getattr(ns, "set", None) or []),
        only=tuple(getattr(ns, "template", None) or []),
        output=getattr(ns, "format", None) or "text",
        workers=workers,
        timeout=timeout,
    )


def load_profile(name: str) -> Profile:
    """
    Loads a rendering profile by name.

    All profiles currently share the built-in capability set.
    """
    return Profile(name=name, capabilities=Capabilities())


__all__ = ["resolve_options", "load_profile", "setup_logging"]
