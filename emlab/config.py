"""
Engine-level configuration constants.

The classification thresholds and windows below are empirical values the
teaching modules rely on. They live in one frozen record so that callers
can override them per call without any shared mutable state.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace


@dataclass(frozen=True)
class EngineConfig:
    """Tunable constants used across solvers."""

    # Medium classification by loss tangent σ/(ωε)
    low_loss_tangent: float = 0.01           # below → low-loss dielectric
    good_conductor_tangent: float = 100.0    # above → good conductor

    # Helmholtz uniformity: ± fraction of the sample count around the centre
    helmholtz_window_fraction: float = 0.10

    # Central-difference step for numerical derivatives
    gradient_step: float = 1e-6

    # |Γ| is clamped to 1 - ε before computing VSWR
    gamma_clamp_epsilon: float = 1e-9

    # α below this is treated as lossless (skin depth absent)
    alpha_zero_tolerance: float = 1e-12

    # Field-line tracing
    field_line_step: float = 0.005
    field_line_steps: int = 500

    # Default number of samples for curves
    default_samples: int = 200

    def with_overrides(self, **kwargs) -> "EngineConfig":
        """Return a copy with some fields replaced."""
        return replace(self, **kwargs)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "EngineConfig":
        """
        Build a config from ``EMLAB_<FIELD>`` environment variables.

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = env.get(f"EMLAB_{f.name.upper()}")
            if raw is None:
                continue
            caster = int if f.type in (int, "int") else float
            try:
                overrides[f.name] = caster(raw)
            except ValueError as exc:
                raise ValueError(f"EMLAB_{f.name.upper()}={raw!r} is not a valid {caster.__name__}") from exc
        return cls(**overrides)


DEFAULT_CONFIG = EngineConfig()


def resolve(config: EngineConfig | None) -> EngineConfig:
    """Return ``config`` or the defaults."""
    return DEFAULT_CONFIG if config is None else config
