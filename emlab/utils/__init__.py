"""Core primitives: constants, units, phasors, coordinates, materials, sampling."""
