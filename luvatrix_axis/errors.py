from __future__ import annotations


class AxisDataError(ValueError):
    pass


class AxisLayoutError(RuntimeError):
    pass
