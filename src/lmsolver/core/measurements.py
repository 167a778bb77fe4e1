"""Measurement set container."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class MeasurementSet:
    """Fixed collection of (design vector, target) pairs.

    The design matrix has shape (M, D) and the targets shape (M,). Both arrays
    are copied and marked read-only on construction.
    """

    design: np.ndarray
    targets: np.ndarray

    def __post_init__(self) -> None:
        design = np.array(self.design, dtype=float)
        targets = np.array(self.targets, dtype=float)

        if design.ndim == 1:
            design = design[:, np.newaxis]
        if design.ndim != 2:
            raise ValueError(f"design must be 1-D or 2-D, got shape {design.shape}")
        if targets.ndim != 1:
            raise ValueError(f"targets must be 1-D, got shape {targets.shape}")
        if design.shape[0] != targets.shape[0]:
            raise ValueError(
                f"design has {design.shape[0]} rows but targets has {targets.shape[0]} values"
            )
        if targets.shape[0] == 0:
            raise ValueError("measurement set is empty")
        if not (np.all(np.isfinite(design)) and np.all(np.isfinite(targets))):
            raise ValueError("measurements contain non-finite values")

        design.flags.writeable = False
        targets.flags.writeable = False
        object.__setattr__(self, "design", design)
        object.__setattr__(self, "targets", targets)

    @classmethod
    def from_xy(cls, x, y) -> "MeasurementSet":
        """Build a set of scalar design values, e.g. from an ``x y`` file."""
        return cls(design=np.asarray(x, dtype=float).reshape(-1, 1), targets=y)

    def __len__(self) -> int:
        return int(self.targets.shape[0])

    def __iter__(self):
        return zip(self.design, self.targets)

    @property
    def design_dim(self) -> int:
        return int(self.design.shape[1])
