"""Time-varying fields: induction, lumped circuits, displacement current."""

from .faraday import sinusoidal_induction, ac_generator, transformer, sliding_bar, magnetic_flux, motional_emf
from .circuits import rc_circuit, rl_circuit, rlc_circuit, resonant_frequency, StepMode, Topology, Damping
from .maxwell import displacement_current, charge_relaxation, relaxation_time
