"""Conversion parameters and the raw-sample to Z mapping."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from hmstl.errors import ConfigError

DEFAULT_SCALE = 1.0
DEFAULT_OFFSET = 1.0
DEFAULT_NAME = 'heightmap'
MIN_OFFSET = 1.0


def _as_real(value: Any, label: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{label} must be a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"{label} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise ConfigError(f"{label} must be finite, got {value!r}")
    return number


def _as_path(value: Any, label: str) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{label} must be a file path, got {value!r}")
    return value


def check_name(name: Any) -> str:
    """Return ``name`` if it is usable as the ``solid``/``endsolid`` label."""

    if not isinstance(name, str) or not name or any(ch.isspace() for ch in name):
        raise ConfigError(f"solid name must be a single non-empty token, got {name!r}")
    if not (name.isascii() and name.isprintable()):
        raise ConfigError(f"solid name must be printable ASCII, got {name!r}")
    return name


@dataclass(frozen=True)
class ZMapping:
    """Map raw 8-bit samples to output Z: ``offset + scale * sample``.

    ``scale`` must be greater than zero and ``offset`` at least 1.0, so every
    surface vertex sits strictly above the base plane.
    """

    scale: float = DEFAULT_SCALE
    offset: float = DEFAULT_OFFSET

    def __post_init__(self) -> None:
        scale = _as_real(self.scale, 'scale')
        offset = _as_real(self.offset, 'offset')
        if scale <= 0:
            raise ConfigError(f"scale must be a number greater than 0, got {self.scale!r}")
        if offset < MIN_OFFSET:
            raise ConfigError(
                f"offset must be a number greater than or equal to {MIN_OFFSET}, got {self.offset!r}"
            )
        object.__setattr__(self, 'scale', scale)
        object.__setattr__(self, 'offset', offset)

    def z(self, sample: int) -> float:
        # offset is applied after scaling and is never scaled itself
        return self.offset + self.scale * sample

    __call__ = z


@dataclass(frozen=True)
class ConversionConfig:
    """Everything a single conversion needs, fixed before it starts.

    ``input`` and ``output`` of ``None`` (or ``"-"``) select standard input
    and standard output respectively.
    """

    scale: float = DEFAULT_SCALE
    offset: float = DEFAULT_OFFSET
    name: str = DEFAULT_NAME
    input: Optional[str] = None
    output: Optional[str] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        mapping = ZMapping(self.scale, self.offset)
        object.__setattr__(self, 'scale', mapping.scale)
        object.__setattr__(self, 'offset', mapping.offset)
        check_name(self.name)
        for label in ('input', 'output'):
            object.__setattr__(self, label, _as_path(getattr(self, label), label))
        if not isinstance(self.verbose, bool):
            raise ConfigError(f"verbose must be true or false, got {self.verbose!r}")

    @property
    def zmapping(self) -> ZMapping:
        return ZMapping(self.scale, self.offset)

    def merged(self, **overrides: Any) -> "ConversionConfig":
        """Return a copy with every non-``None`` override applied."""

        updates = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **updates)


_CONFIG_KEYS = frozenset(f.name for f in fields(ConversionConfig))


def load_config(path: Path | str, base: Optional[ConversionConfig] = None) -> ConversionConfig:
    """Load conversion settings from a YAML file.

    Keys mirror :class:`ConversionConfig` fields; any subset may be given and
    the rest are taken from ``base`` (or the defaults).
    """

    import yaml  # local import to avoid hard dependency if unused

    path = Path(path)
    try:
        with path.open('r', encoding='utf-8') as fp:
            data = yaml.safe_load(fp)
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in config file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")

    unknown = sorted(str(key) for key in data if key not in _CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"unknown config key(s) in {path}: {', '.join(unknown)}")

    settings: Dict[str, Any] = dict(data)
    return (base or ConversionConfig()).merged(**settings)


__all__ = [
    'DEFAULT_SCALE',
    'DEFAULT_OFFSET',
    'DEFAULT_NAME',
    'MIN_OFFSET',
    'ZMapping',
    'ConversionConfig',
    'check_name',
    'load_config',
]
