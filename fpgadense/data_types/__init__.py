from .FixedPoint import FixedPoint, FixedPointTensor
