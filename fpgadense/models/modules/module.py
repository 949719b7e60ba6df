'''
Base class for all hardware module models.
'''

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, asdict
from typing import ClassVar, List

import numpy as np
import pydot
from dacite import from_dict

from fpgadense.data_types import FixedPoint
from fpgadense.models.modules import MODULE_FONTSIZE
from fpgadense.models.exceptions import ModuleNotImplementedError, DimensionMismatchError

@dataclass(kw_only=True)
class Port:
    iteration_space: list[int]
    data_type: FixedPoint
    name: str = "port"


class ModuleBaseMeta(ABCMeta):

    # dictionary lookup for modules
    MODULE_REGISTRY = {}

    def __new__(cls, *args, **kwargs):
        # instantiate a new type corresponding to the type of class being defined
        new_cls = super().__new__(cls, *args, **kwargs)
        if new_cls.register:
            cls.MODULE_REGISTRY[new_cls.name] = new_cls
        return new_cls

    @classmethod
    def get_registry(cls):
        return dict(cls.MODULE_REGISTRY)

    @classmethod
    def build(cls, name: str, config: dict):

        # get the module class
        try:
            module = cls.MODULE_REGISTRY[name]
        except KeyError:
            raise ModuleNotImplementedError(f"No modules found for name={name}")

        # create a new instance of the module
        return from_dict(data_class=module, data=config)


@dataclass(kw_only=True)
class ModuleBase(metaclass=ModuleBaseMeta):
    name: ClassVar[str]
    register: ClassVar[bool] = False

    @property
    @abstractmethod
    def input_ports(self) -> List[Port]:
        pass

    @property
    @abstractmethod
    def output_ports(self) -> List[Port]:
        pass

    @property
    def ports_in(self) -> int:
        return len(self.input_ports)

    @property
    def ports_out(self) -> int:
        return len(self.output_ports)

    @abstractmethod
    def functional_model(self, *inputs: np.ndarray) -> np.ndarray:
        pass

    def input_iter_space(self, idx: int = 0) -> List[int]:
        return self.input_ports[idx].iteration_space

    def output_iter_space(self, idx: int = 0) -> List[int]:
        return self.output_ports[idx].iteration_space

    def check_input(self, data: np.ndarray, idx: int = 0) -> None:
        """
        Check the trailing dimensions of the data against the iteration
        space of the given input port.
        """
        iter_space = self.input_iter_space(idx)
        shape = list(np.shape(data))
        if shape[-len(iter_space):] != iter_space:
            raise DimensionMismatchError(f"{self.name} ({self.input_ports[idx].name}): "
                    f"{shape} does not match {iter_space}")

    def visualise(self, name):
        return pydot.Node(name, label=self.name, shape="box",
                style="filled", fillcolor="chartreuse",
                fontsize=MODULE_FONTSIZE)

    def module_info(self) -> dict:
        info = asdict(self)
        info["type"] = self.name
        return info
