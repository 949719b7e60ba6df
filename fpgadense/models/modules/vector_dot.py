from typing import ClassVar
from dataclasses import dataclass, field

import numpy as np

from fpgadense.data_types import FixedPoint
from fpgadense.models.modules import ModuleBase, Port

@dataclass(kw_only=True)
class VectorDot(ModuleBase):
    """
    Element-wise products of the input vector with every row of the weight
    matrix. Each product is formed at full precision and then shifted back
    to the binary point of `output_t`, so the multiply happens before the
    shift.
    """

    # hardware parameters
    channels: int
    filters: int
    data_t: FixedPoint = field(default_factory=lambda: FixedPoint(16, 8))
    weight_t: FixedPoint = field(default_factory=lambda: FixedPoint(16, 8))
    output_t: FixedPoint = field(default_factory=lambda: FixedPoint(32, 8))

    # class variables
    name: ClassVar[str] = "vector_dot"
    register: ClassVar[bool] = True

    @property
    def product_t(self) -> FixedPoint:
        return FixedPoint(self.data_t.width+self.weight_t.width,
                self.data_t.binary_point+self.weight_t.binary_point)

    @property
    def input_ports(self) -> list[Port]:
        return [
            Port(
                iteration_space=[self.channels],
                data_type=self.data_t,
                name="io_in"
            ),
            Port(
                iteration_space=[self.filters, self.channels],
                data_type=self.weight_t,
                name="io_weights"
            ),
        ]

    @property
    def output_ports(self) -> list[Port]:
        return [ Port(
            iteration_space=[self.filters, self.channels],
            data_type=self.output_t,
            name="io_out"
        )]

    def functional_model(self, *inputs: np.ndarray) -> np.ndarray:

        # unpack the inputs
        data, weights = inputs

        # check input dimensions
        self.check_input(data, 0)
        self.check_input(weights, 1)

        # widen before multiplying
        data = np.asarray(data).astype(self.product_t.dtype)
        weights = np.asarray(weights).astype(self.product_t.dtype)

        # replicate for filter dimension and multiply
        partial = np.multiply(np.expand_dims(data, axis=-2), weights)

        # shift back down to the output binary point
        return self.product_t.rescale(partial, self.output_t)
