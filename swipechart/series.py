from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


def _empty() -> np.ndarray:
    return np.zeros(0, dtype=np.float64)


@dataclass(frozen=True, eq=False)
class DataSeries:
    """Parallel key/value arrays; a NaN value marks a missing sample."""

    keys: np.ndarray = field(default_factory=_empty)
    values: np.ndarray = field(default_factory=_empty)
    disabled: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=bool))

    def __len__(self) -> int:
        return int(self.keys.size)

    @classmethod
    def from_arrays(cls, keys: np.ndarray, values: np.ndarray, *, already_sorted: bool = True) -> "DataSeries":
        n = min(keys.size, values.size)
        k = np.asarray(keys[:n], dtype=np.float64).copy()
        v = np.asarray(values[:n], dtype=np.float64).copy()
        if not already_sorted and n > 1:
            order = np.argsort(k, kind="stable")
            k = k[order]
            v = v[order]
        return cls(keys=k, values=v)

    def with_status(self, disabled: np.ndarray) -> "DataSeries":
        return DataSeries(keys=self.keys, values=self.values, disabled=np.asarray(disabled, dtype=bool).copy())

    def is_disabled(self, index: int) -> bool:
        # The status mask may be shorter than the data; missing entries are enabled.
        return 0 <= index < self.disabled.size and bool(self.disabled[index])

    def is_missing(self, index: int) -> bool:
        return bool(np.isnan(self.values[index]))
