"""
Hardware-friendly activation functions.

All functions work on raw fixed-point values (python integers or numpy
integer arrays) with `binary_point` fractional bits, so that 1.0 is
represented as `1 << binary_point`. The inputs are accumulator values and
are not saturated to the output width beforehand.

- relu: max(0, x)
- hard_tanh: clamp(x, -1.0, 1.0)
- hard_sigmoid: clamp(0.25*x + 0.5, 0.0, 1.0), where 0.25*x is an
  arithmetic right shift by 2 and so rounds towards negative infinity
"""

from typing import ClassVar
from dataclasses import dataclass, field

import numpy as np
import pydot

from fpgadense.data_types import FixedPoint
from fpgadense.models.modules import ModuleBase, Port, MODULE_FONTSIZE
from fpgadense.tools.activation_enum import ACTIVATION

def _clamp(v, lower, upper):
    if isinstance(v, np.ndarray):
        return np.minimum(np.maximum(v, lower), upper)
    return max(lower, min(upper, v))

def identity(v):
    return v

def relu(v):
    # zero keeps the width (dtype) of the input
    if isinstance(v, np.ndarray):
        return np.where(v >= 0, v, np.zeros_like(v))
    return v if v >= 0 else 0

def hard_tanh(v, binary_point: int):
    one = 1 << binary_point
    return _clamp(v, -one, one)

def hard_sigmoid(v, binary_point: int):
    one = 1 << binary_point
    half = one >> 1
    return _clamp((v >> 2) + half, 0, one)

def apply_activation(activation, v, binary_point: int):
    match ACTIVATION.get_type(activation):
        case ACTIVATION.NONE:
            return identity(v)
        case ACTIVATION.RELU:
            return relu(v)
        case ACTIVATION.HARD_TANH:
            return hard_tanh(v, binary_point)
        case ACTIVATION.HARD_SIGMOID:
            return hard_sigmoid(v, binary_point)

@dataclass(kw_only=True)
class Activation(ModuleBase):

    # hardware parameters
    filters: int
    activation: ACTIVATION = ACTIVATION.NONE
    data_t: FixedPoint = field(default_factory=lambda: FixedPoint(40, 8))

    # class variables
    name: ClassVar[str] = "activation"
    register: ClassVar[bool] = True

    @property
    def input_ports(self) -> list[Port]:
        return [ Port(
            iteration_space=[self.filters],
            data_type=self.data_t,
            name="io_in"
        )]

    @property
    def output_ports(self) -> list[Port]:
        return [ Port(
            iteration_space=[self.filters],
            data_type=self.data_t,
            name="io_out"
        )]

    def visualise(self, name):
        return pydot.Node(name, label=self.activation.name.lower(), shape="box",
                style="filled", fillcolor="dimgrey",
                fontsize=MODULE_FONTSIZE)

    def functional_model(self, *inputs: np.ndarray) -> np.ndarray:

        # get the input data
        data = inputs[0]

        # check input dimensions
        self.check_input(data)

        # apply the activation to all elements
        return apply_activation(self.activation, data, self.data_t.binary_point)
