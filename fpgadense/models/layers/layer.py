"""
Base class for all layer models. A layer owns a set of modules, connected
in a module graph, and evaluates them in topological order.
"""
import logging
from collections import OrderedDict
from abc import ABCMeta, abstractmethod
from dataclasses import dataclass, field, fields
from typing import ClassVar, Any

import networkx as nx # type: ignore
import numpy as np
import pydot # type: ignore
from dacite import from_dict

from fpgadense.data_types import FixedPoint
from fpgadense.models.modules import ModuleBase
from fpgadense.models.exceptions import LayerNotImplementedError, \
        InvalidConfigurationError, DataTypeMismatchError

log = logging.getLogger(__name__)

class LayerBaseMeta(ABCMeta):

    LAYER_REGISTRY = {}

    def __new__(cls, *args, **kwargs):
        # instantiate a new type corresponding to the type of class being defined
        new_cls = super().__new__(cls, *args, **kwargs)
        if new_cls.register:
            cls.LAYER_REGISTRY[new_cls.name] = new_cls
        return new_cls

    @classmethod
    def get_registry(cls):
        return dict(cls.LAYER_REGISTRY)

    @classmethod
    def build(cls, name: str, config: dict):

        # get the layer class
        try:
            layer = cls.LAYER_REGISTRY[name]
        except KeyError:
            raise LayerNotImplementedError(f"No layers found for name={name}")

        # create a new instance of the layer
        return layer.from_config(config)

@dataclass(kw_only=True)
class LayerBase(metaclass=LayerBaseMeta):

    data_t: FixedPoint = field(default_factory=lambda: FixedPoint(16,8))

    name: ClassVar[str]
    register: ClassVar[bool] = False

    def __post_init__(self):

        # reject invalid configurations before building anything
        self.validate_config()

        # create the module instances
        self.modules = OrderedDict()
        for name, config_fn in self.module_lookup.items():
            self.modules[name] = ModuleBase.build(name, config_fn())

        # create the module graph
        self.build_module_graph()
        self.check_module_graph()

        # set as initialised
        self.is_init = True
        log.debug(f"built {self}")

    def __setattr__(self, name: str, value: Any) -> None:

        if not hasattr(self, "is_init"):
            super().__setattr__(name, value)
            return

        # the configuration is fixed for the lifetime of the layer
        if name in { f.name for f in fields(self) }:
            raise InvalidConfigurationError(
                    f"cannot set {name}, the layer configuration is immutable")

        super().__setattr__(name, value)

    @classmethod
    def sanitise_config(cls, config: dict) -> dict:
        return config

    @classmethod
    def from_config(cls, config: dict):
        return from_dict(data_class=cls, data=cls.sanitise_config(dict(config)))

    @property
    @abstractmethod
    def module_lookup(self) -> OrderedDict: ...

    @abstractmethod
    def validate_config(self) -> None: ...

    @abstractmethod
    def build_module_graph(self) -> None: ...

    @abstractmethod
    def functional_model(self, *inputs): ...

    def check_module_graph(self) -> None:
        """
        Check the output port of every module agrees in data type and
        iteration space with the input port it drives.
        """
        for src, dst in self.graph.edges():
            port_out = self.modules[src].output_ports[0]
            port_in = self.modules[dst].input_ports[0]
            if port_out.data_type != port_in.data_type:
                raise DataTypeMismatchError(f"{src} -> {dst}: "
                        f"{port_out.data_type} != {port_in.data_type}")
            if port_out.iteration_space != port_in.iteration_space:
                raise DataTypeMismatchError(f"{src} -> {dst}: "
                        f"{port_out.iteration_space} != {port_in.iteration_space}")

    def run_module_graph(self, data: np.ndarray, parameters: dict) -> np.ndarray:
        """
        Evaluate the modules in topological order. The first module gets
        `data`, every other module the output of its predecessor. Extra
        operands for a module (weights, biases) are given in `parameters`,
        keyed by module name.
        """
        outputs = {}
        for node in nx.topological_sort(self.graph):
            predecessors = list(self.graph.predecessors(node))
            inputs = [ outputs[p] for p in predecessors ] if predecessors else [ data ]
            inputs += parameters.get(node, [])
            outputs[node] = self.modules[node].functional_model(*inputs)
        return outputs[node]

    def layer_info(self) -> dict:
        return {
            "type": self.name,
            "data_t": self.data_t.to_dict(),
            "modules": { name: module.module_info() for name, module in self.modules.items() },
        }

    def visualise(self, name):

        cluster = pydot.Cluster(name, label=name,
                style="dashed", bgcolor="lightpink")

        # add a node per module
        for node in self.graph.nodes():
            cluster.add_node(self.modules[node].visualise("_".join([name, node])))

        # connect the modules
        for src, dst in self.graph.edges():
            cluster.add_edge(pydot.Edge("_".join([name, src]), "_".join([name, dst])))

        # return the cluster, and the names of the first and last modules
        order = list(nx.topological_sort(self.graph))
        return cluster, "_".join([name, order[0]]), "_".join([name, order[-1]])
