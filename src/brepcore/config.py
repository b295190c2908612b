"""Kernel configuration.

A ``KernelConfig`` bundles the numeric settings that the rest of the
package takes as explicit parameters, with their documented defaults.
It can be read from a YAML file:

    tolerance: 0.001        # approximation tolerance, model units
    min_distance: 5.0e-7    # global vertex uniqueness distance
    color: [255, 0, 0, 255] # default face color, RGBA

Environment Variables:
    BREPCORE_CONFIG: path of a YAML file read by ``load_config`` when no
                     explicit path is given.

Copyright (c) 2025 brepcore contributors
MIT License
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from math import isfinite
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import yaml

from brepcore.approx.tolerance import Tolerance
from brepcore.errors import ToleranceError
from brepcore.objects import DEFAULT_COLOR
from brepcore.store import DEFAULT_MIN_DISTANCE, Objects

BREPCORE_CONFIG = "BREPCORE_CONFIG"

DEFAULT_TOLERANCE = 1e-3


@dataclass(frozen=True)
class KernelConfig:
    tolerance: float = DEFAULT_TOLERANCE
    min_distance: float = DEFAULT_MIN_DISTANCE
    color: Tuple[int, int, int, int] = DEFAULT_COLOR

    def __post_init__(self) -> None:
        for name in ('tolerance', 'min_distance'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) \
                    or not isfinite(value) or value <= 0:
                raise ToleranceError(f"{name} must be a positive, finite number, got {value!r}")
            object.__setattr__(self, name, float(value))
        color = tuple(self.color)
        if len(color) != 4 or not all(isinstance(c, int) and 0 <= c <= 255 for c in color):
            raise ValueError(f"color must be four integers in 0..255, got {self.color!r}")
        object.__setattr__(self, 'color', color)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> 'KernelConfig':
        """Build a config from a mapping; missing keys keep their defaults."""
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ValueError(f"expected a mapping, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown configuration keys: {unknown}")
        return cls(**dict(data))

    @classmethod
    def from_yaml(cls, path) -> 'KernelConfig':
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        try:
            return cls.from_mapping(data)
        except ValueError as exc:
            raise type(exc)(f"invalid configuration in {path}: {exc}") from exc

    def make_tolerance(self) -> Tolerance:
        return Tolerance(self.tolerance)

    def make_objects(self) -> Objects:
        """An empty ``Objects`` store using this config's minimum distance."""
        return Objects(min_distance=self.min_distance)


def load_config(path: Optional[Path] = None) -> KernelConfig:
    """Load the configuration.

    Search order:
        1. ``path``, if given
        2. the file named by $BREPCORE_CONFIG
        3. built-in defaults
    """
    if path is None:
        env_path = os.environ.get(BREPCORE_CONFIG)
        if env_path:
            path = Path(env_path).expanduser()
    if path is None:
        return KernelConfig()
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"configuration file not found: {path}")
    return KernelConfig.from_yaml(path)


__all__ = ['BREPCORE_CONFIG', 'DEFAULT_TOLERANCE', 'KernelConfig', 'load_config']
