"""
Library of frequency-independent media used by the propagation topics.

A material is described by εᵣ, σ [S/m], μᵣ and, for substrates, a
dielectric loss tangent that is folded into an effective conductivity
at the operating frequency. Lookup accepts the display name or its
snake_case key, in any case.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..errors import InvalidInputError
from .constants import EPS_0

_CONDUCTOR_SIGMA = 1e3


@dataclass(frozen=True)
class Material:
    name: str
    eps_r: float = 1.0
    sigma: float = 0.0
    mu_r: float = 1.0
    tan_d: float = 0.0
    note: str = ""

    @property
    def key(self) -> str:
        return _normalize(self.name)

    @property
    def is_conductor(self) -> bool:
        return self.sigma > _CONDUCTOR_SIGMA

    def effective_conductivity(self, freq_hz: float) -> float:
        """σ + ω·ε₀·εᵣ·tan δ."""
        return self.sigma + 2.0 * math.pi * freq_hz * EPS_0 * self.eps_r * self.tan_d

    def loss_tangent(self, freq_hz: float) -> float:
        return self.effective_conductivity(freq_hz) / (2.0 * math.pi * freq_hz * EPS_0 * self.eps_r)


def _normalize(name: str) -> str:
    return "_".join(name.lower().replace("-", " ").replace("_", " ").split())


MATERIALS: tuple[Material, ...] = (
    # metals
    Material("Copper", sigma=5.8e7),
    Material("Silver", sigma=6.3e7),
    Material("Gold", sigma=4.1e7),
    Material("Aluminum", sigma=3.5e7),
    Material("Iron", sigma=1e7, note="μr taken as 1"),
    # lossy media
    Material("Seawater", eps_r=81.0, sigma=4.0),
    Material("Fresh Water", eps_r=80.0, sigma=5e-3),
    Material("Wet Soil", eps_r=10.0, sigma=1e-2),
    Material("Silicon", eps_r=11.7, sigma=1.56e-3, note="intrinsic"),
    # dielectrics
    Material("FR4", eps_r=4.4, tan_d=0.02),
    Material("Rogers RO4350B", eps_r=3.66, tan_d=0.0037),
    Material("Rogers RT5880", eps_r=2.2, tan_d=0.0009),
    Material("Alumina", eps_r=9.8, tan_d=1e-4),
    Material("Glass", eps_r=4.0),
    Material("PTFE", eps_r=2.1, tan_d=2e-4),
    Material("Polyethylene", eps_r=2.25),
    Material("Air", eps_r=1.0006),
    Material("Vacuum"),
)

_BY_KEY = {m.key: m for m in MATERIALS}


def get_material(name: str) -> Material:
    try:
        return _BY_KEY[_normalize(name)]
    except KeyError:
        raise InvalidInputError("material", name, f"unknown; choose from {list_materials()}") from None


def list_materials() -> list[str]:
    """Display names, sorted."""
    return sorted(m.name for m in MATERIALS)
