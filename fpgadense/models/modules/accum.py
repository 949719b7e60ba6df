from typing import ClassVar
from dataclasses import dataclass, field

import numpy as np

from fpgadense.data_types import FixedPoint
from fpgadense.models.modules import ModuleBase, Port

@dataclass(kw_only=True)
class Accum(ModuleBase):

    # hardware parameters
    channels: int
    filters: int
    data_t: FixedPoint = field(default_factory=lambda: FixedPoint(32, 8))
    acc_t: FixedPoint = field(default_factory=lambda: FixedPoint(40, 8))

    # class variables
    name: ClassVar[str] = "accum"
    register: ClassVar[bool] = True

    @property
    def input_ports(self) -> list[Port]:
        return [ Port(
            iteration_space=[self.filters, self.channels],
            data_type=self.data_t,
            name="io_in"
        )]

    @property
    def output_ports(self) -> list[Port]:
        return [ Port(
            iteration_space=[self.filters],
            data_type=self.acc_t,
            name="io_out"
        )]

    def functional_model(self, *inputs: np.ndarray) -> np.ndarray:

        # get the input data
        data = inputs[0]

        # check input dimensions
        self.check_input(data)

        # accumulate across the channel dimension
        return np.sum(data.astype(self.acc_t.dtype), axis=-1)
