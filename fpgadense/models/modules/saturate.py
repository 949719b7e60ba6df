import logging
from typing import ClassVar
from dataclasses import dataclass, field

import numpy as np

from fpgadense.data_types import FixedPoint
from fpgadense.models.modules import ModuleBase, Port

log = logging.getLogger(__name__)

@dataclass(kw_only=True)
class Saturate(ModuleBase):

    # hardware parameters
    filters: int
    data_t: FixedPoint = field(default_factory=lambda: FixedPoint(40, 8))
    output_t: FixedPoint = field(default_factory=lambda: FixedPoint(16, 8))

    # class variables
    name: ClassVar[str] = "saturate"
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
            data_type=self.output_t,
            name="io_out"
        )]

    def functional_model(self, *inputs: np.ndarray) -> np.ndarray:

        # get the input data
        data = inputs[0]

        # check input dimensions
        self.check_input(data)

        if not self.output_t.contains(data):
            log.debug(f"saturating {data} to {self.output_t}")

        # clamp to the output range, then narrow to the output width
        return self.output_t.saturate(data)
