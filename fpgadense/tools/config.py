"""
Loading of layer and network descriptions. An example network description
(YAML) is shown below; TOML and JSON files with the same structure are
also accepted.

```
network:
  name: example
  input: [0.5, -0.75]
  layers:
    - channels: 2
      filters: 2
      activation: relu
      width: 8
      binary_point: 6
      weights: [[1.0, 1.0], [1.0, -0.5]]
      biases: [0.0, 0.0]
```

Weights, biases and the input are real values, and are quantised to the
data type of the layer that consumes them.
"""

import os
import json
import copy
import logging

import toml
import yaml

from fpgadense.models.layers import LayerBase
from fpgadense.models.network import Network
from fpgadense.models.exceptions import InvalidConfigurationError
from fpgadense.quant import to_fixed_vector, to_fixed_matrix

log = logging.getLogger(__name__)

def load_config(filepath: str) -> dict:

    # get the file type from the extension
    _, ext = os.path.splitext(filepath)

    # open the file and load it into a dictionary
    with open(filepath, "r") as f:
        match ext.lower():
            case ".toml":
                return toml.load(f)
            case ".yml" | ".yaml":
                return yaml.safe_load(f)
            case ".json":
                return json.load(f)
            case _:
                raise InvalidConfigurationError(f"unsupported configuration format: {ext}")

def build_layer(config: dict, name: str = "dense"):
    return LayerBase.build(config.get("type", name), config)

def build_network(config: dict):
    """
    Build a network and its quantised parameters from a description.

    Returns:
        a tuple of the network, the raw input vector, and the lists of raw
        weight matrices and raw bias vectors.
    """

    # allow the network to be nested under a "network" key
    config = config.get("network", config)

    # check the description has layers
    if not config.get("layers"):
        raise InvalidConfigurationError("network description has no layers")

    layers, weights, biases = [], [], []
    for idx, layer_config in enumerate(config["layers"]):

        # separate the parameters from the layer configuration
        layer_config = copy.deepcopy(layer_config)
        layer_weights = layer_config.pop("weights", None)
        layer_biases = layer_config.pop("biases", None)
        if layer_weights is None or layer_biases is None:
            raise InvalidConfigurationError(f"layer {idx} is missing weights or biases")

        # build the layer
        layer = build_layer(layer_config)
        log.info(f"layer {idx}: {layer.channels} -> {layer.filters} "
                f"({layer.activation.name}, {layer.data_t})")

        # quantise the parameters
        weights.append(to_fixed_matrix(layer_weights,
            layer.weight_t.width, layer.weight_t.binary_point))
        biases.append(to_fixed_vector(layer_biases,
            layer.data_t.width, layer.data_t.binary_point))
        layers.append(layer)

    # create the network
    network = Network(config.get("name", "network"), layers)

    # quantise the input
    data = to_fixed_vector(config.get("input", []),
            network.input_t.width, network.input_t.binary_point)

    return network, data, weights, biases
