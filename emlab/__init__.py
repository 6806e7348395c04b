"""
EM Lab — electromagnetics computation engine for interactive teaching.

A library of deterministic numeric procedures, one per physics topic
(transmission lines, plane waves, vector calculus, electro/magnetostatics,
time-varying fields, antennas). Every function is pure: SI inputs in,
a result record out.
"""

__version__ = "0.1.0"
