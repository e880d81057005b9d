from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time, timezone, tzinfo
from decimal import Decimal
from typing import Any

import numpy as np

from swipechart.dates import date_to_key
from swipechart.errors import ChartDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_keys(keys: Any, *, tz: tzinfo = timezone.utc) -> np.ndarray:
    """Coerce keys to float64 seconds; ``datetime``/``date`` entries go through ``date_to_key``."""

    arr = _coerce_1d(keys, label="keys", tz=tz)
    if not np.all(np.isfinite(arr)):
        raise ChartDataError("keys must be finite")
    return arr


def normalize_values(values: Any) -> np.ndarray:
    """Coerce values to float64; ``None`` becomes NaN (a missing sample)."""

    return _coerce_1d(values, label="values", tz=timezone.utc)


def normalize_status(mask: Any) -> np.ndarray:
    if mask is None:
        return np.zeros(0, dtype=bool)
    if torch is not None and isinstance(mask, torch.Tensor):
        mask = mask.detach().cpu().numpy()
    if pd is not None and isinstance(mask, pd.Series):
        mask = mask.to_numpy()
    arr = np.asarray(mask)
    if arr.ndim != 1:
        raise ChartDataError("status mask must be 1-D")
    return arr.astype(bool)


def _coerce_1d(value: Any, *, label: str, tz: tzinfo) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        if pd.api.types.is_datetime64_any_dtype(value):
            return _coerce_ndarray(np.asarray(value.dt.to_pydatetime(), dtype=object), label=label, tz=tz)
        return _coerce_ndarray(value.to_numpy(), label=label, tz=tz)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label, tz=tz)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
        if arr.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(arr, label=label, tz=tz)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str, tz: tzinfo) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)
    if arr.dtype.kind == "M":
        return arr.astype("datetime64[ns]").astype(np.int64).astype(np.float64) / 1e9

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
        elif isinstance(raw, datetime):
            out[i] = date_to_key(raw, tz)
        elif isinstance(raw, date):
            out[i] = date_to_key(datetime.combine(raw, time()), tz)
        elif isinstance(raw, Decimal):
            out[i] = float(raw)
        else:
            try:
                out[i] = float(raw)
            except (TypeError, ValueError) as exc:
                raise ChartDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
