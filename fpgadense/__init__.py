"""
This repo contains a bit-exact functional model of a parameterised fixed-point fully connected (dense) layer, as implemented in FPGA or embedded hardware. Each neuron performs a multiply-accumulate of the inputs and its weights, adds a bias, applies a hardware-friendly activation (ReLU, hard tanh or hard sigmoid) and saturates the result to the data width. A quantisation module converts real valued inputs, weights and biases to the fixed-point representation.

This module is packaged with a command line interface, found in `cli`. This can be used for evaluating a network described in a configuration file. You can run this using `python -m fpgadense`.

An example run would be as follows:

    >>> python -m fpgadense --config_path examples/network.yml \\
    ...     --output_path outputs/example \\
    ...     --log_level INFO \\
    ...     --intermediate


"""
