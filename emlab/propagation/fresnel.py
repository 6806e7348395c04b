"""
Reflection and refraction at a planar dielectric interface.

Non-magnetic media are assumed, so η ∝ 1/n with n = √εr. Angles are in
radians and measured from the surface normal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from ..errors import InvalidInputError, require_positive
from ..results import Curve
from ..utils.constants import intrinsic_impedance
from ..utils.sampling import linspace


@dataclass
class NormalIncidenceResult:
    eta1: float
    eta2: float
    gamma: float
    tau: float
    reflectance: float
    transmittance: float


def normal_incidence(er1: float, er2: float) -> NormalIncidenceResult:
    """Γ = (η₂ − η₁)/(η₂ + η₁), τ = 1 + Γ; power split R + T = 1."""
    eta1 = intrinsic_impedance(er1)
    eta2 = intrinsic_impedance(er2)
    gamma = (eta2 - eta1) / (eta2 + eta1)
    return NormalIncidenceResult(
        eta1=eta1,
        eta2=eta2,
        gamma=gamma,
        tau=2.0 * eta2 / (eta1 + eta2),
        reflectance=gamma**2,
        transmittance=1.0 - gamma**2,
    )


@dataclass
class ObliqueResult:
    """Fresnel coefficients at one angle. TIR leaves the transmitted quantities absent."""
    theta_i: float
    n1: float
    n2: float
    theta_t: float | None
    is_tir: bool
    gamma_perp: float | None
    gamma_par: float | None
    tau_perp: float | None
    tau_par: float | None
    brewster_angle: float
    critical_angle: float | None

    @property
    def theta_t_deg(self) -> float | None:
        return None if self.theta_t is None else math.degrees(self.theta_t)

    @property
    def brewster_angle_deg(self) -> float:
        return math.degrees(self.brewster_angle)

    @property
    def critical_angle_deg(self) -> float | None:
        return None if self.critical_angle is None else math.degrees(self.critical_angle)

    @property
    def reflectance_perp(self) -> float:
        return 1.0 if self.gamma_perp is None else self.gamma_perp**2

    @property
    def reflectance_par(self) -> float:
        return 1.0 if self.gamma_par is None else self.gamma_par**2


def _check_angle(theta_i: float) -> None:
    if not 0.0 <= theta_i <= math.pi / 2.0:
        raise InvalidInputError("theta_i", theta_i, "must be in [0, π/2]")


def critical_angle(er1: float, er2: float) -> float | None:
    """asin(n₂/n₁), defined only going from the denser medium (n₁ > n₂)."""
    n1, n2 = math.sqrt(require_positive("epsilon_r1", er1)), math.sqrt(require_positive("epsilon_r2", er2))
    return math.asin(n2 / n1) if n1 > n2 else None


def brewster_angle(er1: float, er2: float) -> float:
    """atan(n₂/n₁); always defined."""
    return math.atan(math.sqrt(require_positive("epsilon_r2", er2) / require_positive("epsilon_r1", er1)))


def oblique_incidence(er1: float, er2: float, theta_i: float) -> ObliqueResult:
    """Snell refraction and Γ⊥/Γ∥, τ⊥/τ∥ for incidence from medium 1."""
    require_positive("epsilon_r1", er1)
    require_positive("epsilon_r2", er2)
    _check_angle(theta_i)
    n1, n2 = math.sqrt(er1), math.sqrt(er2)
    sin_t = n1 / n2 * math.sin(theta_i)

    base = dict(theta_i=theta_i, n1=n1, n2=n2,
                brewster_angle=brewster_angle(er1, er2), critical_angle=critical_angle(er1, er2))
    if sin_t > 1.0:
        return ObliqueResult(theta_t=None, is_tir=True, gamma_perp=None, gamma_par=None,
                             tau_perp=None, tau_par=None, **base)

    theta_t = math.asin(sin_t)
    eta1, eta2 = 1.0 / n1, 1.0 / n2
    ci, ct = math.cos(theta_i), math.cos(theta_t)
    den_perp = eta2 * ci + eta1 * ct
    den_par = eta2 * ct + eta1 * ci
    return ObliqueResult(
        theta_t=theta_t,
        is_tir=False,
        gamma_perp=(eta2 * ci - eta1 * ct) / den_perp,
        gamma_par=(eta2 * ct - eta1 * ci) / den_par,
        tau_perp=2.0 * eta2 * ci / den_perp,
        tau_par=2.0 * eta2 * ci / den_par,
        **base,
    )


def fresnel_curve(er1: float, er2: float, samples: int = 200) -> Curve:
    """
    |Γ⊥| and |Γ∥| for θᵢ over [0, π/2].

    Inside the TIR region both magnitudes are reported as 1.
    """
    angles = linspace(0.0, math.pi / 2.0, samples)
    perp = np.ones_like(angles)
    par = np.ones_like(angles)
    for i, theta in enumerate(angles):
        res = oblique_incidence(er1, er2, min(float(theta), math.pi / 2.0))
        if not res.is_tir:
            perp[i] = abs(res.gamma_perp)
            par[i] = abs(res.gamma_par)
    return Curve("theta_i_deg", np.degrees(angles), {"gamma_perp_mag": perp, "gamma_par_mag": par})
