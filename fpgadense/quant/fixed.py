"""
Fixed-point quantisation helpers for dense layer inputs, weights and biases.

Conventions

- values are real numbers (float) or integers, converted to raw signed
  fixed-point integers.
- the scale factor is 2^binary_point, so 1.0 == (1 << binary_point).
- results are saturated to the target signed width, and NaN becomes 0.
- reals are rounded half up, i.e. floor(value*2^binary_point + 0.5).
"""

import math
import logging
from numbers import Integral
from typing import Sequence

import numpy as np

from fpgadense.data_types import FixedPoint, FixedPointTensor

log = logging.getLogger(__name__)

def _to_fixed_raw(value, binary_point: int) -> int:
    if isinstance(value, Integral):
        return int(value) << binary_point
    return math.floor(value * (1 << binary_point) + 0.5)

def to_fixed(value, width: int, binary_point: int) -> int:
    """
    Quantise a single value to a raw fixed-point integer, saturating to
    `width` bits. Integers are shifted exactly; reals are rounded.
    """
    data_t = FixedPoint(width, binary_point)
    if not isinstance(value, Integral) and math.isnan(value):
        log.debug(f"quantised NaN to 0 ({data_t})")
        return 0
    if not isinstance(value, Integral) and math.isinf(value):
        raw = data_t.max_raw if value > 0 else data_t.min_raw
    else:
        raw = _to_fixed_raw(value, binary_point)
    clamped = data_t.saturate(raw)
    if clamped != raw:
        log.debug(f"saturated {value} to {clamped} ({data_t})")
    return clamped

def to_fixed_vector(values: Sequence, width: int, binary_point: int) -> list[int]:
    return [ to_fixed(v, width, binary_point) for v in values ]

def to_fixed_matrix(values: Sequence[Sequence], width: int, binary_point: int) -> list[list[int]]:
    # row lengths are not checked
    return [ to_fixed_vector(row, width, binary_point) for row in values ]

def from_fixed(raw: int, binary_point: int) -> float:
    """
    Real value of a raw fixed-point integer, for debugging and reports.
    """
    return int(raw) / float(1 << binary_point)

def quantise_tensor(values, data_t: FixedPoint) -> FixedPointTensor:

    # quantise each element
    values = np.asarray(values)
    raw = np.array([ to_fixed(v, data_t.width, data_t.binary_point)
        for v in values.flatten() ], dtype=data_t.dtype).reshape(values.shape)

    # return the tagged tensor
    return FixedPointTensor(raw, data_t)

def dequantise_tensor(tensor: FixedPointTensor) -> np.ndarray:
    return tensor.to_real()
