"""
The bias module adds the bias term of each neuron to its accumulated sum.
The addition is full precision and never saturates.
"""

from typing import ClassVar
from dataclasses import dataclass, field

import numpy as np

from fpgadense.data_types import FixedPoint
from fpgadense.models.modules import ModuleBase, Port

@dataclass(kw_only=True)
class Bias(ModuleBase):

    # hardware parameters
    filters: int
    data_t: FixedPoint = field(default_factory=lambda: FixedPoint(40, 8))
    bias_t: FixedPoint = field(default_factory=lambda: FixedPoint(16, 8))

    # class variables
    name: ClassVar[str] = "bias"
    register: ClassVar[bool] = True

    @property
    def input_ports(self) -> list[Port]:
        return [
            Port(
                iteration_space=[self.filters],
                data_type=self.data_t,
                name="io_in"
            ),
            Port(
                iteration_space=[self.filters],
                data_type=self.bias_t,
                name="io_bias"
            ),
        ]

    @property
    def output_ports(self) -> list[Port]:
        return [ Port(
            iteration_space=[self.filters],
            data_type=self.data_t,
            name="io_out"
        )]

    def functional_model(self, *inputs: np.ndarray) -> np.ndarray:

        # get the input data
        data, biases = inputs

        # check input dimensions
        self.check_input(data, 0)
        self.check_input(biases, 1)

        # add the bias term to the data
        return data.astype(self.data_t.dtype) + np.asarray(biases).astype(self.data_t.dtype)
