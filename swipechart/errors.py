from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when keys/values handed to the chart cannot be coerced to numeric series."""
