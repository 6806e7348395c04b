"""Transmission lines: reflection, Smith chart, matching, line models, transients."""

from .line import LoadAnalysis, analyze_load, standing_wave, input_impedance_curve, lossy_line_input
from .smith import SmithPoint, smith_point, z_to_gamma, gamma_to_z
from .matching import quarter_wave, binomial_transformer, single_stub, l_network, StubType
from .line_types import LineParameters, coaxial_line, two_wire_line, microstrip, analyze_line
from .transient import bounce_diagram
