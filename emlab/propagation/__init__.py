"""Wave propagation: media, interfaces, polarization, waveguides, plane waves."""

from .medium import MediumClass, MediumResult, analyze_medium, analyze_material
from .fresnel import normal_incidence, oblique_incidence, fresnel_curve
from .polarization import PolarizationType, RotationSense, analyze_polarization
from .waveguide import ModeRecord, rectangular_modes, circular_te11_cutoff, circular_tm01_cutoff
from .plane_wave import PlaneWaveResult, analyze_plane_wave, compare_phase
