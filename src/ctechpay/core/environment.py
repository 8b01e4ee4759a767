"""
Resolution of ``CTECHPAY_*`` settings from the process environment, a
``.env`` file and explicit overrides.

Only keys in the ``CTECHPAY_`` namespace are picked up from the process
environment and the file, so unrelated secrets never end up in a
:class:`ClientEnvironment`. Each resolved key remembers where it came from,
which configuration errors use to point at the offending source.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, MutableMapping, Optional

from .errors import ConfigError

__all__ = [
    "ENV_PREFIX",
    "ClientEnvironment",
    "build_environment",
    "load_env_file",
]

ENV_PREFIX = "CTECHPAY_"

SOURCE_ENVIRONMENT = "environment"
SOURCE_OVERRIDE = "override"


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _parse_env_file(path: Path) -> Dict[str, str]:
    """
    Parse ``KEY=VALUE`` lines; ``#`` comments, blank lines and an ``export``
    prefix are allowed. A missing file yields no values.
    """
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for lineno, raw_line in enumerate(data.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ConfigError(f"{path}:{lineno}: expected KEY=VALUE, got '{raw_line}'")
        values[key] = _unquote(value.strip())
    return values


def load_env_file(
    path: str = ".env",
    *,
    environ: Optional[MutableMapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Load every variable from ``path`` into ``environ`` (default :data:`os.environ`).

    Existing keys are preserved. The merged mapping is returned.
    """
    target: MutableMapping[str, str] = environ if environ is not None else os.environ
    for key, value in _parse_env_file(Path(path)).items():
        target.setdefault(key, value)
    return dict(target)


@dataclass(frozen=True)
class ClientEnvironment:
    variables: Mapping[str, str]
    sources: Mapping[str, str] = field(default_factory=dict, repr=False)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self.variables.get(key, default)

    def source_of(self, key: str) -> str:
        """Where ``key`` was resolved from: ``environment``, a file path, ``override`` or ``default``."""
        return self.sources.get(key, "default")


def _settings_only(values: Mapping[str, str]) -> Dict[str, str]:
    return {key: value for key, value in values.items() if key.startswith(ENV_PREFIX)}


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> ClientEnvironment:
    """
    Resolve ``CTECHPAY_*`` settings, lowest priority first:

    1. ``env_file`` (skipped when ``None``), filling keys only
    2. ``base``, which defaults to :data:`os.environ`
    3. ``overrides``, taken as-is
    """
    merged: Dict[str, str] = {}
    sources: Dict[str, str] = {}

    for key, value in _settings_only(os.environ if base is None else base).items():
        merged[key] = value
        sources[key] = SOURCE_ENVIRONMENT

    if env_file is not None:
        for key, value in _settings_only(_parse_env_file(Path(env_file))).items():
            if key not in merged:
                merged[key] = value
                sources[key] = env_file

    for key, value in (overrides or {}).items():
        merged[key] = value
        sources[key] = SOURCE_OVERRIDE

    return ClientEnvironment(variables=merged, sources=sources)
