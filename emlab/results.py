"""
Sampled curve and field-grid records.

Every plottable output of the engine is one of these two shapes:
  - Curve: one independent axis plus named dependent series of equal length
  - FieldGrid: x/y axis vectors plus named 2-D arrays of shape (len(y), len(x))
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class Curve:
    """Parallel sequences sampled over one independent variable."""
    x_label: str
    x: np.ndarray
    series: dict[str, np.ndarray] = field(default_factory=dict)

    def __post_init__(self):
        self.x = np.asarray(self.x)
        for name, values in list(self.series.items()):
            values = np.asarray(values)
            if values.shape != self.x.shape:
                raise ValueError(
                    f"series '{name}' has shape {values.shape}, expected {self.x.shape}"
                )
            self.series[name] = values

    def __len__(self) -> int:
        return len(self.x)

    def __getitem__(self, name: str) -> np.ndarray:
        return self.series[name]

    def to_dict(self) -> dict:
        out = {self.x_label: _listify(self.x)}
        out.update({name: _listify(v) for name, v in self.series.items()})
        return out


@dataclass
class FieldGrid:
    """Values sampled on a regular x/y grid (row index follows y)."""
    x: np.ndarray
    y: np.ndarray
    values: dict[str, np.ndarray] = field(default_factory=dict)

    def __post_init__(self):
        self.x = np.asarray(self.x)
        self.y = np.asarray(self.y)
        expected = (len(self.y), len(self.x))
        for name, values in list(self.values.items()):
            values = np.asarray(values)
            if values.shape != expected:
                raise ValueError(f"grid '{name}' has shape {values.shape}, expected {expected}")
            self.values[name] = values

    @property
    def shape(self) -> tuple[int, int]:
        return (len(self.y), len(self.x))

    def __getitem__(self, name: str) -> np.ndarray:
        return self.values[name]

    def to_dict(self) -> dict:
        out = {"x": _listify(self.x), "y": _listify(self.y)}
        out.update({name: _listify(v) for name, v in self.values.items()})
        return out


def _listify(values: np.ndarray) -> list | dict:
    if np.iscomplexobj(values):
        return {"re": np.real(values).tolist(), "im": np.imag(values).tolist()}
    return values.tolist()
