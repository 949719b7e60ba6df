"""
An ordered chain of dense layers. The output vector of layer `k` is the
input vector of layer `k+1`, so consecutive layers must agree on the vector
length and on the fixed-point data type.
"""

import logging
from typing import Sequence

import pydot # type: ignore

from fpgadense.data_types import FixedPointTensor
from fpgadense.models.layers import DenseLayer
from fpgadense.models.exceptions import InvalidConfigurationError, DimensionMismatchError

log = logging.getLogger(__name__)

class Network:

    def __init__(self, name: str, layers: Sequence[DenseLayer]):
        self.name = name
        self.layers = list(layers)

        # check there is at least one layer
        if len(self.layers) == 0:
            raise InvalidConfigurationError(f"network {name} has no layers")

        # check consecutive layers can be chained
        for idx, (prev, curr) in enumerate(zip(self.layers[:-1], self.layers[1:])):
            if prev.filters != curr.channels:
                raise InvalidConfigurationError(f"layer {idx} has {prev.filters} outputs, "
                        f"layer {idx+1} expects {curr.channels} inputs")
            if prev.output_t != curr.input_t:
                raise InvalidConfigurationError(f"layer {idx} outputs {prev.output_t}, "
                        f"layer {idx+1} expects {curr.input_t}")

    def __len__(self):
        return len(self.layers)

    @property
    def input_t(self):
        return self.layers[0].input_t

    @property
    def output_t(self):
        return self.layers[-1].output_t

    def functional_model(self, data, weights: Sequence, biases: Sequence,
            return_intermediate: bool = False):
        """
        Evaluate all layers in order.

        Args:
            data: raw input vector of the first layer.
            weights: one raw weight matrix per layer.
            biases: one raw bias vector per layer.
            return_intermediate: also return the output of every layer.

        Returns:
            the raw output of the last layer, or a list with the output of
            every layer if `return_intermediate` is set.
        """

        # check a set of parameters is given for every layer
        if len(weights) != len(self.layers) or len(biases) != len(self.layers):
            raise DimensionMismatchError(f"expected weights and biases for {len(self.layers)} layers, "
                    f"got {len(weights)} and {len(biases)}")

        # each layer needs the complete output of the previous one
        outputs = []
        for idx, layer in enumerate(self.layers):
            data = layer.functional_model(data, weights[idx], biases[idx])
            log.debug(f"{self.name} layer {idx}: {data.tolist()}")
            outputs.append(data)

        return outputs if return_intermediate else outputs[-1]

    def evaluate(self, data, weights: Sequence, biases: Sequence) -> FixedPointTensor:
        return FixedPointTensor(self.functional_model(data, weights, biases), self.output_t)

    def visualise(self) -> pydot.Dot:
        g = pydot.Dot(graph_type='digraph', compound=True)

        # add every layer as a cluster
        edges = []
        for idx, layer in enumerate(self.layers):
            cluster, first, last = layer.visualise(f"layer_{idx}")
            g.add_subgraph(cluster)
            edges.append((first, last))

        # connect the layers
        for (_, prev_last), (curr_first, _) in zip(edges[:-1], edges[1:]):
            g.add_edge(pydot.Edge(prev_last, curr_first))

        return g

    def report(self) -> dict:
        return {
            "name": self.name,
            "layers": [ layer.layer_info() for layer in self.layers ],
        }
