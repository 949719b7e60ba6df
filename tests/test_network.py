import os
import glob
import tempfile
import unittest
import ddt
import pydot
import numpy as np

from fpgadense.data_types import FixedPoint, FixedPointTensor
from fpgadense.models.layers import DenseLayer
from fpgadense.models.network import Network
from fpgadense.models.exceptions import InvalidConfigurationError, DimensionMismatchError, \
        LayerNotImplementedError
from fpgadense.tools.activation_enum import ACTIVATION
from fpgadense.tools.config import load_config, build_layer, build_network

TESTS_PATH = os.path.dirname(__file__)
EXAMPLE_NETWORKS = [ os.path.join(TESTS_PATH, "..", "examples", "network.yml"),
        os.path.join(TESTS_PATH, "configs", "networks", "example.toml"),
        os.path.join(TESTS_PATH, "configs", "networks", "example.json") ]

def example_layers(data_t=FixedPoint(8, 6)):
    return [
        DenseLayer(channels=2, filters=2, activation=ACTIVATION.RELU, data_t=data_t),
        DenseLayer(channels=2, filters=1, activation=ACTIVATION.HARD_SIGMOID, data_t=data_t),
    ]

# raw parameters of the example network
DATA = [32, -48]
WEIGHTS = [ [[64, 64], [64, -32]], [[32, 96]] ]
BIASES = [ [0, 0], [-16] ]

class TestNetwork(unittest.TestCase):

    def setUp(self):
        self.net = Network("example", example_layers())

    def test_functional_model(self):
        out = self.net.functional_model(DATA, WEIGHTS, BIASES)
        self.assertEqual(out.tolist(), [49])

    def test_intermediate(self):
        outputs = self.net.functional_model(DATA, WEIGHTS, BIASES, return_intermediate=True)
        self.assertEqual(len(outputs), 2)
        self.assertEqual(outputs[0].tolist(), [0, 56])
        self.assertEqual(outputs[1].tolist(), [49])

    def test_matches_layer_by_layer(self):
        data = DATA
        for layer, weights, biases in zip(self.net.layers, WEIGHTS, BIASES):
            data = layer.functional_model(data, weights, biases)
        np.testing.assert_array_equal(self.net.functional_model(DATA, WEIGHTS, BIASES), data)

    def test_evaluate(self):
        out = self.net.evaluate(DATA, WEIGHTS, BIASES)
        self.assertIsInstance(out, FixedPointTensor)
        self.assertEqual(out.data_t, FixedPoint(8, 6))
        np.testing.assert_array_equal(out.to_real(), [0.765625])

    def test_data_types(self):
        self.assertEqual(len(self.net), 2)
        self.assertEqual(self.net.input_t, FixedPoint(8, 6))
        self.assertEqual(self.net.output_t, FixedPoint(8, 6))

    def test_parameter_count(self):
        with self.assertRaises(DimensionMismatchError):
            self.net.functional_model(DATA, WEIGHTS[:1], BIASES)
        with self.assertRaises(DimensionMismatchError):
            self.net.functional_model(DATA, WEIGHTS, BIASES + [[0]])

    def test_input_shape(self):
        with self.assertRaises(DimensionMismatchError):
            self.net.functional_model([32], WEIGHTS, BIASES)

    def test_report(self):
        report = self.net.report()
        self.assertEqual(report["name"], "example")
        self.assertEqual([ info["activation"] for info in report["layers"] ],
                [ "RELU", "HARD_SIGMOID" ])

    def test_visualise(self):
        g = self.net.visualise()
        self.assertIsInstance(g, pydot.Dot)
        self.assertEqual(len(g.get_subgraphs()), 2)
        self.assertEqual(len(g.get_edges()), 1)
        self.assertIn("layer_0_saturate", g.to_string())


class TestNetworkConfiguration(unittest.TestCase):

    def test_no_layers(self):
        with self.assertRaises(InvalidConfigurationError):
            Network("empty", [])

    def test_size_mismatch(self):
        layers = [ DenseLayer(channels=2, filters=3), DenseLayer(channels=2, filters=1) ]
        with self.assertRaises(InvalidConfigurationError):
            Network("mismatched", layers)

    def test_data_type_mismatch(self):
        layers = [ DenseLayer(channels=2, filters=2, data_t=FixedPoint(8, 6)),
                DenseLayer(channels=2, filters=1, data_t=FixedPoint(8, 4)) ]
        with self.assertRaises(InvalidConfigurationError):
            Network("mismatched", layers)

    def test_single_layer(self):
        net = Network("single", example_layers()[:1])
        self.assertEqual(net.functional_model(DATA, WEIGHTS[:1], BIASES[:1]).tolist(), [0, 56])


@ddt.ddt
class TestNetworkDescription(unittest.TestCase):

    @ddt.data(*EXAMPLE_NETWORKS)
    def test_load_config(self, path):
        config = load_config(path)
        config = config.get("network", config)
        self.assertEqual(config["name"], "example")
        self.assertEqual(len(config["layers"]), 2)

    @ddt.data(*EXAMPLE_NETWORKS)
    def test_build_network(self, path):
        net, data, weights, biases = build_network(load_config(path))
        self.assertEqual(len(net), 2)
        self.assertEqual(data, DATA)
        self.assertEqual(weights, WEIGHTS)
        self.assertEqual(biases, BIASES)
        self.assertEqual(net.functional_model(data, weights, biases).tolist(), [49])

    def test_build_layer(self):
        layer = build_layer({ "channels": 3, "filters": 1, "activation": "hard_tanh" })
        self.assertIsInstance(layer, DenseLayer)
        self.assertEqual(layer.activation, ACTIVATION.HARD_TANH)
        with self.assertRaises(LayerNotImplementedError):
            build_layer({ "type": "pooling", "channels": 3, "filters": 1 })

    def test_description_is_not_modified(self):
        config = load_config(EXAMPLE_NETWORKS[0])
        build_network(config)
        self.assertIn("weights", config["network"]["layers"][0])
        self.assertEqual(config["network"]["layers"][0]["width"], 8)

    def test_mismatched_layers(self):
        config = load_config(os.path.join(TESTS_PATH, "configs", "networks", "mismatched.yml"))
        with self.assertRaises(InvalidConfigurationError):
            build_network(config)

    def test_missing_parameters(self):
        config = load_config(EXAMPLE_NETWORKS[0])
        del config["network"]["layers"][1]["biases"]
        with self.assertRaises(InvalidConfigurationError):
            build_network(config)

    def test_no_layers(self):
        with self.assertRaises(InvalidConfigurationError):
            build_network({ "network": { "name": "empty", "layers": [] } })

    def test_unsupported_format(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "network.xml")
            with open(path, "w") as f:
                f.write("<network/>")
            with self.assertRaises(InvalidConfigurationError):
                load_config(path)
