"""Velocity model settings read from command-line parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping, TypeVar

__all__ = ["VelocityConfig"]

_T = TypeVar("_T")


def _flag(value) -> bool:
    return bool(int(value))


def _get(params: Mapping, name: str, convert: Callable[[object], _T], default: _T) -> _T:
    if name not in params:
        return default
    try:
        return convert(params[name])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid value {params[name]!r} for parameter {name}") from exc


@dataclass
class VelocityConfig:
    """Velocity and anisotropy files and interpolation settings."""

    vel_file: str
    eps_file: str | None = None
    del_file: str | None = None
    theta_x_file: str | None = None
    theta_y_file: str | None = None
    anisotropic: bool = False
    tti: bool = False
    theta_is_dip: bool = True
    force_3d: bool = False
    stencil: int = 3
    detect_boundaries: bool = True
    boundary_fraction: float = 0.25

    @classmethod
    def from_params(cls, params: Mapping) -> "VelocityConfig":
        """Build the settings from a ``name -> value`` mapping; ``vel`` is required."""
        if "vel" not in params:
            raise ValueError("Velocity file not specified.")
        return cls(
            vel_file=str(params["vel"]),
            eps_file=_get(params, "epsilon", str, None),
            del_file=_get(params, "delta", str, None),
            theta_x_file=_get(params, "theta_x", str, None),
            theta_y_file=_get(params, "theta_y", str, None),
            anisotropic=_get(params, "anisotropic", _flag, False),
            tti=_get(params, "tti", _flag, False),
            theta_is_dip=_get(params, "theta_dip", _flag, True),
            force_3d=_get(params, "force_3d", _flag, False),
            stencil=_get(params, "interpolation_stencil", int, 3),
            detect_boundaries=_get(params, "detect_velocity_boundaries", _flag, True),
            boundary_fraction=_get(params, "velocity_boundary_fraction", float, 0.25),
        )