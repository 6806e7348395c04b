"""
Physical constants for electromagnetics.

All values in SI units unless otherwise noted.
"""

import math

from ..errors import require_positive

# ─── Fundamental Constants ───────────────────────────────────────────────────
C_0 = 299_792_458.0             # Speed of light in vacuum [m/s]
MU_0 = 4.0 * math.pi * 1e-7    # Permeability of free space [H/m]
EPS_0 = 1.0 / (MU_0 * C_0**2)  # Permittivity of free space [F/m]
ETA_0 = MU_0 * C_0              # Impedance of free space ≈ 376.73 Ω
ELEMENTARY_CHARGE = 1.602_176_634e-19   # [C]
ELECTRON_MASS = 9.109_383_7015e-31      # [kg]
PROTON_MASS = 1.672_621_923_69e-27      # [kg]
BOLTZMANN = 1.380649e-23        # Boltzmann constant [J/K]
PLANCK = 6.626_070_15e-34       # Planck constant [J·s]
T_0 = 290.0                     # Standard noise temperature [K]

# ─── Common Characteristic Impedances ────────────────────────────────────────
Z0_DEFAULT = 50.0               # Standard system impedance [Ω]
Z0_75 = 75.0                    # 75 Ω systems (cable TV, etc.)


# ─── Derived Helpers ─────────────────────────────────────────────────────────

def wavelength(freq_hz: float, er: float = 1.0, mur: float = 1.0) -> float:
    """Wavelength [m] at ``freq_hz`` in a medium with relative εr, μr."""
    require_positive("frequency", freq_hz)
    return C_0 / (freq_hz * math.sqrt(er * mur))


def frequency_from_wavelength(wavelength_m: float, er: float = 1.0) -> float:
    """Convert wavelength [m] to frequency [Hz]."""
    require_positive("wavelength", wavelength_m)
    return C_0 / (wavelength_m * math.sqrt(er))


def angular_frequency(freq_hz: float) -> float:
    """ω = 2πf."""
    return 2.0 * math.pi * freq_hz


def wavenumber(freq_hz: float, er: float = 1.0, mur: float = 1.0) -> float:
    """k = 2π/λ [rad/m]."""
    return 2.0 * math.pi / wavelength(freq_hz, er, mur)


def conductor_skin_depth(freq_hz: float, sigma: float, mu_r: float = 1.0) -> float | None:
    """
    Good-conductor skin depth δ = √(2/(ωμσ)) [m].

    Returns None for σ = 0 (no attenuation).
    """
    require_positive("frequency", freq_hz)
    omega = angular_frequency(freq_hz)
    denominator = omega * mu_r * MU_0 * sigma
    if denominator <= 0:
        return None
    return math.sqrt(2.0 / denominator)


def intrinsic_impedance(er: float = 1.0, mur: float = 1.0) -> float:
    """Lossless intrinsic impedance η = η₀·√(μr/εr) [Ω]."""
    require_positive("epsilon_r", er)
    return ETA_0 * math.sqrt(mur / er)


def phase_velocity(er: float = 1.0, mur: float = 1.0) -> float:
    """Lossless phase velocity c/√(εr μr) [m/s]."""
    require_positive("epsilon_r", er)
    require_positive("mu_r", mur)
    return C_0 / math.sqrt(er * mur)
