from dataclasses import dataclass
from typing import Union

import numpy as np

from fpgadense.models.exceptions import DataTypeMismatchError, FixedPointRangeError

RawType = Union[int, np.ndarray]

@dataclass(frozen=True)
class FixedPoint:
    """
    Signed fixed-point data type. A raw integer `r` of this type has the
    real value `r / 2**binary_point` and always fits in `width` bits.
    """
    width: int
    binary_point: int

    @property
    def int_bits(self) -> int:
        return self.width - self.binary_point

    @property
    def scale(self) -> int:
        return 1 << self.binary_point

    @property
    def min_raw(self) -> int:
        return -(1 << (self.width-1))

    @property
    def max_raw(self) -> int:
        return (1 << (self.width-1)) - 1

    @property
    def dtype(self):
        """
        numpy dtype able to hold raw values of this type without wrapping.
        """
        return np.int64 if self.width <= 63 else object

    def to_dict(self):
        return {
            "width": self.width,
            "binary_point": self.binary_point
        }

    def contains(self, raw: RawType) -> bool:
        if isinstance(raw, np.ndarray):
            if raw.size == 0:
                return True
            return bool(np.all(raw >= self.min_raw) and np.all(raw <= self.max_raw))
        return self.min_raw <= raw <= self.max_raw

    def saturate(self, raw: RawType) -> RawType:
        """
        Clamp raw values to the representable range of this type.

        Arrays are returned with this type's dtype, so the result is
        reinterpreted as exactly `width` bits.
        """
        if isinstance(raw, np.ndarray):
            clamped = np.minimum(np.maximum(raw, self.min_raw), self.max_raw)
            return clamped.astype(self.dtype)
        return max(self.min_raw, min(self.max_raw, int(raw)))

    def rescale(self, raw: RawType, data_t: "FixedPoint") -> RawType:
        """
        Move raw values from this binary point to the binary point of
        `data_t`. Dropping fractional bits is an arithmetic right shift,
        which truncates towards negative infinity.
        """
        shift = self.binary_point - data_t.binary_point
        if shift >= 0:
            return raw >> shift
        return raw << -shift

    def quantise(self, value) -> int:
        from fpgadense.quant import to_fixed
        return to_fixed(value, self.width, self.binary_point)

    def to_real(self, raw: RawType):
        if isinstance(raw, np.ndarray):
            return raw.astype(float) / float(self.scale)
        return raw / float(self.scale)

    def apply(self, val):
        from fpbinary import FpBinary
        return FpBinary(int_bits=self.int_bits,
            frac_bits=self.binary_point, signed=True, value=val)

    def __str__(self):
        # the sign bit is not counted
        return f"Q{self.int_bits-1}.{self.binary_point}"

@dataclass
class FixedPointTensor:
    """
    Raw fixed-point integers tagged with their data type.
    """
    raw: np.ndarray
    data_t: FixedPoint

    def __post_init__(self):
        self.raw = np.asarray(self.raw, dtype=self.data_t.dtype)
        if not self.data_t.contains(self.raw):
            raise FixedPointRangeError(
                    f"values do not fit in {self.data_t} ({self.data_t.width} bits)")

    @property
    def shape(self):
        return self.raw.shape

    def __len__(self):
        return len(self.raw)

    def to_real(self) -> np.ndarray:
        return self.data_t.to_real(self.raw)

    def saturate(self, data_t: FixedPoint) -> "FixedPointTensor":
        if data_t.binary_point != self.data_t.binary_point:
            raise DataTypeMismatchError(
                    f"cannot saturate {self.data_t} to {data_t}, binary points differ")
        return FixedPointTensor(data_t.saturate(self.raw), data_t)

    def tolist(self) -> list:
        return self.raw.tolist()
