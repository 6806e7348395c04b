"""Antennas: dipoles, uniform linear arrays, link and radar budgets."""

from .dipole import analyze_dipole, DipoleKind, hertzian_pattern, half_wave_pattern
from .arrays import UniformLinearArray, analyze_array, scanned_array, endfire_array, ElementPattern
from .link_budget import friis, radar, noise_floor, free_space_path_loss
