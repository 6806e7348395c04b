"""
Hollow metallic waveguide mode analysis.

Rectangular guide a × b (a the broad wall) filled with (εr, μr):
  - f_c(m, n) = (v/2)·√((m/a)² + (n/b)²), v = c/√(εr μr)
  - TE_mn needs m + n ≥ 1, TM_mn needs m, n ≥ 1
  - above cutoff: β = k√(1 − (f_c/f)²), v_p·v_g = v²
Circular guide TE11 / TM01 cutoffs are included for comparison.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..errors import InvalidInputError, require_count, require_positive
from ..utils.constants import C_0, ETA_0

# First zeros of J1' and J0
_P11_PRIME = 1.8412
_P01 = 2.4049


@dataclass
class ModeRecord:
    """One TE or TM mode at the operating frequency. Propagating-only values are None below cutoff."""
    mode_type: str
    m: int
    n: int
    cutoff_frequency: float
    cutoff_wavelength: float
    propagates: bool
    beta: float | None
    attenuation: float | None     # Np/m of the evanescent field
    guide_wavelength: float | None
    phase_velocity: float | None
    group_velocity: float | None
    impedance: float | None

    @property
    def label(self) -> str:
        return f"{self.mode_type}{self.m}{self.n}"


@dataclass
class WaveguideResult:
    a: float
    b: float
    frequency: float
    epsilon_r: float
    mu_r: float
    modes: list[ModeRecord] = field(default_factory=list)
    dominant: ModeRecord | None = None
    single_mode_bandwidth: float | None = None

    @property
    def propagating(self) -> list[ModeRecord]:
        return [m for m in self.modes if m.propagates]


def _velocity(er: float, mur: float) -> float:
    return C_0 / math.sqrt(er * mur)


def cutoff_frequency(a: float, b: float, m: int, n: int, er: float = 1.0, mur: float = 1.0) -> float:
    """Cutoff of the (m, n) mode [Hz]."""
    require_positive("a", a)
    require_positive("b", b)
    return 0.5 * _velocity(er, mur) * math.sqrt((m / a) ** 2 + (n / b) ** 2)


def mode_at(a: float, b: float, m: int, n: int, freq_hz: float, mode_type: str = "TE",
            er: float = 1.0, mur: float = 1.0) -> ModeRecord:
    """Evaluate one mode at ``freq_hz``."""
    mode_type = mode_type.upper()
    if mode_type not in ("TE", "TM"):
        raise InvalidInputError("mode_type", mode_type, "must be 'TE' or 'TM'")
    if m < 0 or n < 0 or (m == 0 and n == 0):
        raise InvalidInputError("(m, n)", (m, n), "indices must be >= 0 and not both zero")
    if mode_type == "TM" and (m == 0 or n == 0):
        raise InvalidInputError("(m, n)", (m, n), "TM modes need m, n >= 1")
    require_positive("frequency", freq_hz)

    v = _velocity(er, mur)
    fc = cutoff_frequency(a, b, m, n, er, mur)
    k = 2.0 * math.pi * freq_hz / v
    eta = ETA_0 * math.sqrt(mur / er)
    record = dict(mode_type=mode_type, m=m, n=n, cutoff_frequency=fc, cutoff_wavelength=v / fc)

    if freq_hz <= fc:
        return ModeRecord(propagates=False, beta=None,
                          attenuation=k * math.sqrt((fc / freq_hz) ** 2 - 1.0),
                          guide_wavelength=None, phase_velocity=None, group_velocity=None,
                          impedance=None, **record)

    factor = math.sqrt(1.0 - (fc / freq_hz) ** 2)
    return ModeRecord(
        propagates=True,
        beta=k * factor,
        attenuation=None,
        guide_wavelength=(v / freq_hz) / factor,
        phase_velocity=v / factor,
        group_velocity=v * factor,
        impedance=eta / factor if mode_type == "TE" else eta * factor,
        **record,
    )


def rectangular_modes(a: float, b: float, freq_hz: float, max_m: int = 3, max_n: int = 3,
                      er: float = 1.0, mur: float = 1.0) -> WaveguideResult:
    """
    Enumerate TE/TM modes with m ≤ ``max_m`` and n ≤ ``max_n``.

    Modes are sorted by cutoff (ties keep TE before TM). The single-mode
    bandwidth is the gap between the two lowest cutoffs and is absent when
    fewer than two modes are enumerated.
    """
    require_positive("a", a)
    require_positive("b", b)
    max_m = require_count("max_m", max_m)
    max_n = require_count("max_n", max_n)

    modes = []
    for m in range(max_m + 1):
        for n in range(max_n + 1):
            if m == 0 and n == 0:
                continue
            modes.append(mode_at(a, b, m, n, freq_hz, "TE", er, mur))
            if m >= 1 and n >= 1:
                modes.append(mode_at(a, b, m, n, freq_hz, "TM", er, mur))
    modes.sort(key=lambda rec: (rec.cutoff_frequency, rec.mode_type, rec.m, rec.n))

    dominant = modes[0] if modes else None
    bandwidth = None
    if len(modes) >= 2:
        bandwidth = modes[1].cutoff_frequency - modes[0].cutoff_frequency
    return WaveguideResult(a=a, b=b, frequency=freq_hz, epsilon_r=er, mu_r=mur,
                           modes=modes, dominant=dominant, single_mode_bandwidth=bandwidth)


# ─── Circular guide ─────────────────────────────────────────────────────────

def circular_te11_cutoff(radius: float, er: float = 1.0, mur: float = 1.0) -> float:
    """Dominant TE11 cutoff of a circular guide [Hz]."""
    require_positive("radius", radius)
    return _P11_PRIME * _velocity(er, mur) / (2.0 * math.pi * radius)


def circular_tm01_cutoff(radius: float, er: float = 1.0, mur: float = 1.0) -> float:
    """TM01 cutoff of a circular guide [Hz]."""
    require_positive("radius", radius)
    return _P01 * _velocity(er, mur) / (2.0 * math.pi * radius)
