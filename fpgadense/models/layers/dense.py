"""
A fully connected dense layer with `channels` inputs and `filters` outputs
(neurons). Every neuron performs a multiply-accumulate of the inputs and
its row of weights, adds its bias, applies the activation function and
saturates the result to the data width.

The inputs, weights, biases and outputs all share the data type `data_t`.
Everything between the multiply and the final saturation is carried at the
accumulator width, so no intermediate value can overflow.

.. code-block:: python

    layer = DenseLayer(channels=2, filters=2, activation=ACTIVATION.RELU,
            data_t=FixedPoint(8, 6))
    layer.functional_model([32, -48], [[64, 64], [64, -32]], [0, 0]) # [0, 56]
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import ClassVar

import networkx as nx # type: ignore
import numpy as np

from fpgadense.data_types import FixedPoint, FixedPointTensor
from fpgadense.models.layers import LayerBase
from fpgadense.models.modules import int2bits
from fpgadense.models.exceptions import InvalidConfigurationError, \
        DimensionMismatchError, DataTypeMismatchError, FixedPointRangeError
from fpgadense.tools.activation_enum import ACTIVATION

log = logging.getLogger(__name__)

def pop_aliased(config: dict, key: str, aliases: list[str]):
    """
    Remove a parameter given under its own name or any of its aliases,
    rejecting descriptions that give it twice with different values.
    """
    values = { name: config.pop(name) for name in [key, *aliases] if name in config }
    if any(value != first for first in values.values() for value in values.values()):
        raise InvalidConfigurationError(f"conflicting values for {key}: {values}")
    return next(iter(values.values()), None)

@dataclass(kw_only=True)
class DenseLayer(LayerBase):
    channels: int
    filters: int
    activation: ACTIVATION = ACTIVATION.NONE
    data_t: FixedPoint = field(default_factory=lambda: FixedPoint(16,8))

    name: ClassVar[str] = "dense"
    register: ClassVar[bool] = True

    @classmethod
    def sanitise_config(cls, config: dict) -> dict:

        # hardware parameter names
        for key, aliases in [ ("channels", ["x", "inputs"]),
                ("filters", ["n", "neurons"]), ("activation", ["af"]) ]:
            if any(name in config for name in [key, *aliases]):
                config[key] = pop_aliased(config, key, aliases)

        # data type given as a width and binary point
        width = pop_aliased(config, "width", ["in_w"])
        binary_point = pop_aliased(config, "binary_point", ["fracBits"])
        if "data_t" in config:
            data_t = config["data_t"]
            if isinstance(data_t, FixedPoint):
                data_t = data_t.to_dict()
            for key, value in [ ("width", width), ("binary_point", binary_point) ]:
                if value is not None and value != data_t.get(key):
                    raise InvalidConfigurationError(f"{key}={value} conflicts with data_t={data_t}")
        elif width is not None or binary_point is not None:
            if width is None or binary_point is None:
                raise InvalidConfigurationError("width and binary_point must be given together "
                        f"(width={width}, binary_point={binary_point})")
            config["data_t"] = { "width": width, "binary_point": binary_point }

        # activation given as a name or code
        if "activation" in config:
            config["activation"] = ACTIVATION.get_type(config["activation"])

        return super().sanitise_config(config)

    def validate_config(self) -> None:

        # normalise the activation selector
        self.activation = ACTIVATION.get_type(self.activation)

        if self.channels <= 0:
            raise InvalidConfigurationError(f"channels must be positive ({self.channels})")
        if self.filters <= 0:
            raise InvalidConfigurationError(f"filters must be positive ({self.filters})")
        if self.data_t.width <= 1:
            raise InvalidConfigurationError(f"width must be greater than 1 ({self.data_t.width})")
        if not 1 <= self.data_t.binary_point < self.data_t.width:
            raise InvalidConfigurationError(f"binary point must be in [1, {self.data_t.width}) "
                    f"({self.data_t.binary_point})")

    @property
    def input_t(self) -> FixedPoint:
        return self.data_t

    @property
    def output_t(self) -> FixedPoint:
        return self.data_t

    @property
    def weight_t(self) -> FixedPoint:
        return self.data_t

    @property
    def product_t(self) -> FixedPoint:
        # a product after shifting back to the data binary point
        return FixedPoint(2*self.data_t.width, self.data_t.binary_point)

    @property
    def acc_t(self) -> FixedPoint:
        # room for the sum of all the products and the bias
        return FixedPoint(2*self.data_t.width + int2bits(self.channels+1),
                self.data_t.binary_point)

    @property
    def module_lookup(self) -> OrderedDict:
        return OrderedDict({
            "vector_dot": self.get_vector_dot_parameters,
            "accum": self.get_accum_parameters,
            "bias": self.get_bias_parameters,
            "activation": self.get_activation_parameters,
            "saturate": self.get_saturate_parameters,
        })

    def get_vector_dot_parameters(self) -> dict:
        return {
            "channels": self.channels,
            "filters": self.filters,
            "data_t": self.input_t.to_dict(),
            "weight_t": self.weight_t.to_dict(),
            "output_t": self.product_t.to_dict(),
        }

    def get_accum_parameters(self) -> dict:
        return {
            "channels": self.channels,
            "filters": self.filters,
            "data_t": self.product_t.to_dict(),
            "acc_t": self.acc_t.to_dict(),
        }

    def get_bias_parameters(self) -> dict:
        return {
            "filters": self.filters,
            "data_t": self.acc_t.to_dict(),
            "bias_t": self.data_t.to_dict(),
        }

    def get_activation_parameters(self) -> dict:
        return {
            "filters": self.filters,
            "activation": self.activation,
            "data_t": self.acc_t.to_dict(),
        }

    def get_saturate_parameters(self) -> dict:
        return {
            "filters": self.filters,
            "data_t": self.acc_t.to_dict(),
            "output_t": self.output_t.to_dict(),
        }

    def build_module_graph(self) -> None:

        # get the module graph
        self.graph = nx.DiGraph()

        # add the modules
        for name in self.module_lookup:
            self.graph.add_node(name, module=self.modules[name])

        # connect them in a chain
        nx.add_path(self.graph, list(self.module_lookup))

    def check_operand(self, operand, shape: list[int], label: str) -> np.ndarray:
        """
        Return the raw values of an operand after checking its data type,
        shape and range against the layer.
        """

        # tagged operands must have the layer data type
        if isinstance(operand, FixedPointTensor):
            if operand.data_t != self.data_t:
                raise DataTypeMismatchError(f"{label}: {operand.data_t} != {self.data_t}")
            raw = operand.raw
        else:
            raw = np.asarray(operand)
            if raw.size > 0 and raw.dtype.kind not in "iuO":
                raise DataTypeMismatchError(f"{label}: expected raw integers, got {raw.dtype}")

        # check the shape
        if list(raw.shape) != shape:
            raise DimensionMismatchError(f"{label}: {list(raw.shape)} != {shape}")

        # check the range
        if not self.data_t.contains(raw):
            raise FixedPointRangeError(f"{label}: values do not fit in "
                    f"{self.data_t.width} bits")

        return raw.astype(self.data_t.dtype)

    def functional_model(self, data, weights, biases) -> np.ndarray:

        # check the operands
        data = self.check_operand(data, [self.channels], "data")
        weights = self.check_operand(weights, [self.filters, self.channels], "weights")
        biases = self.check_operand(biases, [self.filters], "biases")

        # all neurons are evaluated together
        return self.run_module_graph(data, {
            "vector_dot": [ weights ],
            "bias": [ biases ],
        })

    def evaluate(self, data, weights, biases) -> FixedPointTensor:
        return FixedPointTensor(self.functional_model(data, weights, biases), self.output_t)

    def layer_info(self) -> dict:
        info = super().layer_info()
        info["channels"] = self.channels
        info["filters"] = self.filters
        info["activation"] = self.activation.name
        return info
