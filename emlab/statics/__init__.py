"""Electro- and magnetostatics: charges, images, Gauss, Biot–Savart, C and L."""

from .point_charges import PointCharge, electric_field, electric_potential, sample_field, trace_field_lines
from .images import charge_above_plane, charge_near_sphere
from .gauss import sphere_profile
from .capacitance import capacitor
from .biot_savart import infinite_wire, current_loop, loop_field, helmholtz, coax_profile
from .solenoid import analyze_solenoid, toroid
from .forces import parallel_wires, torque_on_loop, charged_particle
from .inductance import inductor, mutual_coaxial_loops, coupling_coefficient
