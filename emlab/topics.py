"""
Topic registry and dispatcher.

Every presentation module maps to one :class:`Topic`. The registry pairs
each topic with the pure function that computes it, the defaults the
presentation layer starts from, and a one-line description.

Provides:
  - Topic: enum of topic identifiers
  - TOPIC_REGISTRY: Topic → TopicEntry
  - evaluate(): merge defaults with caller parameters and compute
  - list_topics(): registry summary for menus and the CLI
  - result_to_dict(): flatten a result record into plain Python values
"""

from __future__ import annotations

import ast
import dataclasses
import inspect
import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

import numpy as np

from .antennas import arrays, dipole, link_budget
from .errors import InvalidInputError, UnknownTopicError
from .propagation import fresnel, medium, plane_wave, polarization, waveguide
from .results import Curve, FieldGrid
from .statics import biot_savart, capacitance, forces, gauss, images, inductance, point_charges, solenoid
from .timevarying import circuits, faraday, maxwell
from .transmission import line, line_types, matching, smith, transient
from .utils.coordinates import Vector3
from .utils.phasor import Phasor
from .vectors import scalar_fields, vector_fields, vector_ops

logger = logging.getLogger(__name__)


class Topic(str, Enum):
    # Transmission lines
    LOAD_ANALYSIS = "load_analysis"
    STANDING_WAVE = "standing_wave"
    INPUT_IMPEDANCE = "input_impedance"
    SMITH_CHART = "smith_chart"
    QUARTER_WAVE = "quarter_wave"
    BINOMIAL_TRANSFORMER = "binomial_transformer"
    SINGLE_STUB = "single_stub"
    L_NETWORK = "l_network"
    LINE_PARAMETERS = "line_parameters"
    MICROSTRIP = "microstrip"
    TRANSIENT = "transient"
    # Waves / propagation
    MEDIUM = "medium"
    ATTENUATION = "attenuation"
    SKIN_DEPTH = "skin_depth"
    FRESNEL = "fresnel"
    FRESNEL_CURVE = "fresnel_curve"
    POLARIZATION = "polarization"
    WAVEGUIDE = "waveguide"
    PLANE_WAVE = "plane_wave"
    # Vector calculus
    SCALAR_FIELD = "scalar_field"
    VECTOR_FIELD = "vector_field"
    CROSS_PRODUCT = "cross_product"
    VECTOR_ADD = "vector_add"
    # Electrostatics
    POINT_CHARGES = "point_charges"
    FIELD_LINES = "field_lines"
    IMAGE_PLANE = "image_plane"
    IMAGE_SPHERE = "image_sphere"
    GAUSS_SPHERE = "gauss_sphere"
    CAPACITOR = "capacitor"
    # Magnetostatics
    INFINITE_WIRE = "infinite_wire"
    CURRENT_LOOP = "current_loop"
    HELMHOLTZ = "helmholtz"
    COAX_FIELD = "coax_field"
    SOLENOID = "solenoid"
    TOROID = "toroid"
    WIRE_FORCES = "wire_forces"
    LOOP_TORQUE = "loop_torque"
    CHARGED_PARTICLE = "charged_particle"
    INDUCTOR = "inductor"
    # Time-varying
    FARADAY = "faraday"
    GENERATOR = "generator"
    TRANSFORMER = "transformer"
    SLIDING_BAR = "sliding_bar"
    RC_CIRCUIT = "rc_circuit"
    RL_CIRCUIT = "rl_circuit"
    RLC_CIRCUIT = "rlc_circuit"
    DISPLACEMENT_CURRENT = "displacement_current"
    CHARGE_RELAXATION = "charge_relaxation"
    # Antennas
    DIPOLE = "dipole"
    ARRAY = "array"
    SCANNED_ARRAY = "scanned_array"
    FRIIS = "friis"
    RADAR = "radar"


@dataclass(frozen=True)
class TopicEntry:
    function: Callable[..., Any]
    description: str
    defaults: dict[str, Any] = field(default_factory=dict)


TOPIC_REGISTRY: dict[Topic, TopicEntry] = {
    # ─── Transmission lines ─────────────────────────────────────────────────
    Topic.LOAD_ANALYSIS: TopicEntry(
        line.analyze_load, "Reflection coefficient, VSWR and return loss of a load",
        {"z0": 50.0, "z_load": 100 + 0j}),
    Topic.STANDING_WAVE: TopicEntry(
        line.standing_wave, "Voltage and current standing-wave envelopes",
        {"z0": 50.0, "z_load": 100 + 50j, "freq_hz": 1e9}),
    Topic.INPUT_IMPEDANCE: TopicEntry(
        line.input_impedance_curve, "Input impedance vs. electrical length of a lossless line",
        {"z0": 50.0, "z_load": 25 + 25j, "max_length_wl": 1.0}),
    Topic.SMITH_CHART: TopicEntry(
        smith.trace_toward_generator, "Smith-chart trace of a load moving toward the generator",
        {"z_load": 25 + 50j, "z0": 50.0, "max_length_wl": 0.5}),
    Topic.QUARTER_WAVE: TopicEntry(
        matching.quarter_wave, "Quarter-wave transformer for a resistive load",
        {"z0": 50.0, "r_load": 100.0, "freq_hz": 1e9}),
    Topic.BINOMIAL_TRANSFORMER: TopicEntry(
        matching.binomial_transformer, "Maximally flat multi-section quarter-wave transformer",
        {"z0": 50.0, "r_load": 100.0, "freq_hz": 1e9, "sections": 3}),
    Topic.SINGLE_STUB: TopicEntry(
        matching.single_stub, "Single shunt-stub match: both (d, l) solutions",
        {"z0": 50.0, "z_load": 60 - 80j, "freq_hz": 2e9, "stub_type": "short"}),
    Topic.L_NETWORK: TopicEntry(
        matching.l_network, "Lumped L-section matching networks",
        {"z0": 50.0, "z_load": 200 - 100j, "freq_hz": 500e6}),
    Topic.LINE_PARAMETERS: TopicEntry(
        line_types.analyze_line, "RLGC, Z₀ and γ of coaxial or two-wire lines",
        {"geometry": "coaxial", "freq_hz": 1e9}),
    Topic.MICROSTRIP: TopicEntry(
        line_types.microstrip, "Microstrip effective permittivity and Z₀",
        {"width": 3e-3, "height": 1.6e-3, "er": 4.4}),
    Topic.TRANSIENT: TopicEntry(
        transient.bounce_diagram, "Step-excited line: bounce diagram and load voltage",
        {"v_source": 10.0, "r_source": 25.0, "r_load": 100.0, "z0": 50.0, "length": 1.0}),
    # ─── Waves / propagation ────────────────────────────────────────────────
    Topic.MEDIUM: TopicEntry(
        medium.analyze_medium, "Propagation constant, loss tangent and medium class",
        {"freq_hz": 1e9, "er": 81.0, "mur": 1.0, "sigma": 4.0}),
    Topic.ATTENUATION: TopicEntry(
        medium.attenuation_profile, "Field and power decay with depth in a lossy medium",
        {"freq_hz": 1e6, "er": 81.0, "sigma": 4.0}),
    Topic.SKIN_DEPTH: TopicEntry(
        medium.skin_depth_vs_frequency, "Skin depth vs. frequency",
        {"f_min": 1e3, "f_max": 1e10, "sigma": 5.8e7}),
    Topic.FRESNEL: TopicEntry(
        fresnel.oblique_incidence, "Oblique incidence: Snell, Fresnel, Brewster, TIR",
        {"er1": 1.0, "er2": 4.0, "theta_i": math.radians(30.0)}),
    Topic.FRESNEL_CURVE: TopicEntry(
        fresnel.fresnel_curve, "|Γ⊥| and |Γ∥| vs. angle of incidence",
        {"er1": 1.0, "er2": 4.0}),
    Topic.POLARIZATION: TopicEntry(
        polarization.analyze_polarization, "Polarization ellipse and Stokes parameters",
        {"ax": 1.0, "ay": 1.0, "delta": math.pi / 2.0}),
    Topic.WAVEGUIDE: TopicEntry(
        waveguide.rectangular_modes, "Rectangular waveguide TE/TM mode table",
        {"a": 22.86e-3, "b": 10.16e-3, "freq_hz": 10e9}),
    Topic.PLANE_WAVE: TopicEntry(
        plane_wave.analyze_plane_wave, "Uniform plane wave snapshot and Poynting density",
        {"freq_hz": 1e9, "e0": 1.0}),
    # ─── Vector calculus ────────────────────────────────────────────────────
    Topic.SCALAR_FIELD: TopicEntry(
        scalar_fields.sample_scalar_field, "Scalar field with numerical and exact gradient",
        {"preset": "gaussian"}),
    Topic.VECTOR_FIELD: TopicEntry(
        vector_fields.sample_vector_field, "Vector field with divergence and curl",
        {"preset": "vortex"}),
    Topic.CROSS_PRODUCT: TopicEntry(
        vector_ops.cross_product, "Cross product and parallelogram area",
        {"a": (1.0, 0.0, 0.0), "b": (0.0, 1.0, 0.0)}),
    Topic.VECTOR_ADD: TopicEntry(
        vector_ops.vector_add, "Vector addition and angle between",
        {"a": (3.0, 1.0, 0.0), "b": (1.0, 2.0, 0.0)}),
    # ─── Electrostatics ─────────────────────────────────────────────────────
    Topic.POINT_CHARGES: TopicEntry(
        point_charges.sample_field, "Field and potential of point charges",
        {"charges": [(-0.5, 0.0, 1e-9), (0.5, 0.0, -1e-9)]}),
    Topic.FIELD_LINES: TopicEntry(
        point_charges.trace_field_lines, "Field lines traced from a source charge",
        {"charges": [(-0.5, 0.0, 1e-9), (0.5, 0.0, -1e-9)], "num_lines": 12}),
    Topic.IMAGE_PLANE: TopicEntry(
        images.charge_above_plane, "Point charge above a grounded plane",
        {"q": 1e-9, "height": 0.1}),
    Topic.IMAGE_SPHERE: TopicEntry(
        images.charge_near_sphere, "Point charge near a grounded sphere",
        {"q": 1e-9, "radius": 0.1, "distance": 0.3}),
    Topic.GAUSS_SPHERE: TopicEntry(
        gauss.sphere_profile, "E and V of a uniformly charged sphere",
        {"q": 1e-9, "radius": 0.1}),
    Topic.CAPACITOR: TopicEntry(
        capacitance.capacitor, "Capacitance, charge and energy per geometry",
        {"geometry": "parallel_plate", "voltage": 10.0}),
    # ─── Magnetostatics ─────────────────────────────────────────────────────
    Topic.INFINITE_WIRE: TopicEntry(
        biot_savart.infinite_wire, "B around an infinite straight wire",
        {"current": 10.0, "distance": 0.1}),
    Topic.CURRENT_LOOP: TopicEntry(
        biot_savart.current_loop, "On-axis field of a circular loop",
        {"radius": 0.05, "current": 1.0}),
    Topic.HELMHOLTZ: TopicEntry(
        biot_savart.helmholtz, "Helmholtz pair field and uniformity",
        {"radius": 0.1, "current": 1.0, "turns": 100}),
    Topic.COAX_FIELD: TopicEntry(
        biot_savart.coax_profile, "B(r) across a coaxial cable",
        {"current": 1.0}),
    Topic.SOLENOID: TopicEntry(
        solenoid.analyze_solenoid, "Solenoid field, inductance and energy",
        {"turns": 500, "length": 0.2, "radius": 0.02, "current": 1.0}),
    Topic.TOROID: TopicEntry(
        solenoid.toroid, "Toroid field and inductance",
        {"turns": 200, "current": 1.0}),
    Topic.WIRE_FORCES: TopicEntry(
        forces.parallel_wires, "Force between parallel currents",
        {"current1": 10.0, "current2": 10.0, "separation": 0.1}),
    Topic.LOOP_TORQUE: TopicEntry(
        forces.torque_on_loop, "Torque on a current loop in a uniform field",
        {"current": 1.0, "area": 0.01}),
    Topic.CHARGED_PARTICLE: TopicEntry(
        forces.charged_particle, "Lorentz force and cyclotron motion",
        {}),
    Topic.INDUCTOR: TopicEntry(
        inductance.inductor, "Inductance and stored energy per geometry",
        {"geometry": "solenoid", "current": 1.0}),
    # ─── Time-varying ───────────────────────────────────────────────────────
    Topic.FARADAY: TopicEntry(
        faraday.sinusoidal_induction, "Sinusoidal flux and induced EMF",
        {"turns": 100, "b_peak": 0.1, "area": 0.01, "freq_hz": 60.0}),
    Topic.GENERATOR: TopicEntry(
        faraday.ac_generator, "AC generator peak/RMS EMF from RPM",
        {"turns": 100, "b_field": 0.5, "area": 0.01, "rpm": 3600.0}),
    Topic.TRANSFORMER: TopicEntry(
        faraday.transformer, "Ideal transformer ratios",
        {"n_primary": 100, "n_secondary": 500, "v_primary": 120.0, "z_load": 50.0}),
    Topic.SLIDING_BAR: TopicEntry(
        faraday.sliding_bar, "Motional EMF of a sliding bar",
        {"velocity": 5.0, "b_field": 0.5, "length": 0.2}),
    Topic.RC_CIRCUIT: TopicEntry(
        circuits.rc_circuit, "RC charge/discharge",
        {"resistance": 1e3, "capacitance": 1e-6, "v_source": 5.0}),
    Topic.RL_CIRCUIT: TopicEntry(
        circuits.rl_circuit, "RL energize/de-energize",
        {"resistance": 100.0, "inductance": 10e-3, "v_source": 5.0}),
    Topic.RLC_CIRCUIT: TopicEntry(
        circuits.rlc_circuit, "RLC resonance, Q and frequency response",
        {"resistance": 10.0, "inductance": 1e-3, "capacitance": 1e-9, "topology": "series"}),
    Topic.DISPLACEMENT_CURRENT: TopicEntry(
        maxwell.displacement_current, "Displacement current in a parallel-plate capacitor",
        {"area": 0.01, "separation": 1e-3, "v_peak": 10.0, "freq_hz": 1e6}),
    Topic.CHARGE_RELAXATION: TopicEntry(
        maxwell.charge_relaxation, "Free-charge relaxation and continuity",
        {"er": 1.0, "sigma": 1e-6}),
    # ─── Antennas ───────────────────────────────────────────────────────────
    Topic.DIPOLE: TopicEntry(
        dipole.analyze_dipole, "Hertzian / half-wave dipole pattern and parameters",
        {"kind": "half_wave", "freq_hz": 300e6}),
    Topic.ARRAY: TopicEntry(
        arrays.analyze_array, "Uniform linear array factor and beamwidths",
        {"num_elements": 8, "spacing": 0.5, "beta": 0.0}),
    Topic.SCANNED_ARRAY: TopicEntry(
        arrays.scanned_array, "Phase-steered uniform linear array",
        {"num_elements": 8, "spacing": 0.5, "scan_deg": 30.0}),
    Topic.FRIIS: TopicEntry(
        link_budget.friis, "Friis free-space link budget",
        {"p_tx": 1.0, "g_tx_dbi": 10.0, "g_rx_dbi": 10.0, "freq_hz": 2.4e9, "distance": 1000.0}),
    Topic.RADAR: TopicEntry(
        link_budget.radar, "Radar range equation and detection range",
        {"p_tx": 1000.0, "freq_hz": 10e9, "rcs": 1.0}),
}


def get_topic(topic: Topic | str) -> tuple[Topic, TopicEntry]:
    """Resolve a topic name or member to its registry entry."""
    try:
        key = Topic(topic)
    except ValueError:
        raise UnknownTopicError(
            f"Unknown topic '{topic}'. Available: {[t.value for t in Topic]}"
        ) from None
    return key, TOPIC_REGISTRY[key]


def evaluate(topic: Topic | str, **params) -> Any:
    """
    Compute ``topic`` with its defaults overridden by ``params``.

    Parameters the topic function does not accept are rejected.
    """
    key, entry = get_topic(topic)
    accepted = inspect.signature(entry.function).parameters
    unknown = sorted(set(params) - set(accepted))
    if unknown:
        raise InvalidInputError("params", unknown, f"not accepted by topic '{key.value}'")

    arguments = {**entry.defaults, **params}
    logger.debug("Evaluating %s with %s", key.value, arguments)
    return entry.function(**arguments)


def parse_param(raw: str) -> Any:
    """
    Parse a textual parameter value.

    Python literals are accepted (numbers, complex such as ``100-50j``,
    tuples and lists); anything else is kept as a string.
    """
    try:
        return ast.literal_eval(raw.strip())
    except (ValueError, SyntaxError):
        return raw.strip()


def parse_assignments(pairs: list[str]) -> dict[str, Any]:
    """Turn ``["key=value", ...]`` into a parameter dict."""
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise InvalidInputError("param", pair, "expected key=value")
        params[key.strip()] = parse_param(value)
    return params


def list_topics() -> list[dict[str, Any]]:
    """Name, description and defaults of every registered topic."""
    return [
        {"name": key.value, "description": entry.description, "defaults": dict(entry.defaults)}
        for key, entry in TOPIC_REGISTRY.items()
    ]


def result_to_dict(result: Any) -> Any:
    """
    Flatten a result into JSON-friendly values.

    Dataclass records become dicts, complex numbers and phasors become
    {"re", "im"}, vectors become [x, y, z], curves and grids become dicts of
    lists, enums become their values.
    """
    if isinstance(result, Enum):
        return result.value
    if isinstance(result, (Curve, FieldGrid)):
        return result.to_dict()
    if isinstance(result, Vector3):
        return list(result.as_tuple())
    if isinstance(result, Phasor):
        return {"re": result.re, "im": result.im}
    if isinstance(result, (complex, np.complexfloating)):
        return {"re": float(result.real), "im": float(result.imag)}
    if dataclasses.is_dataclass(result) and not isinstance(result, type):
        return {f.name: result_to_dict(getattr(result, f.name)) for f in dataclasses.fields(result)}
    if isinstance(result, np.ndarray):
        if np.iscomplexobj(result):
            return {"re": np.real(result).tolist(), "im": np.imag(result).tolist()}
        return result.tolist()
    if isinstance(result, np.generic):
        return result.item()
    if isinstance(result, dict):
        return {str(k): result_to_dict(v) for k, v in result.items()}
    if isinstance(result, (list, tuple)):
        return [result_to_dict(v) for v in result]
    return result
