"""
A command line interface for evaluating a fixed-point dense network described in a configuration file
"""

import logging
import os
import json
import argparse

from fpgadense.quant import from_fixed
from fpgadense.tools.config import load_config, build_network

def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="fpgaDense Model Command Line Interface")
    parser.add_argument('-c','--config_path', metavar='PATH', required=True,
        help='Path to network description (.yml, .toml or .json)')
    parser.add_argument('-o','--output_path', metavar='PATH', required=False,
        help='Path to output directory')
    parser.add_argument('--log_level', choices=['DEBUG','INFO','WARNING','ERROR'],
        default='WARNING', help='Logging level')
    parser.add_argument('--intermediate', action='store_true',
        help='Report the output of every layer')
    return parser.parse_args(argv)

def main(argv=None):

    # parse the arguments
    args = parse_args(argv)

    # make the output directory if it does not exist
    if args.output_path is not None and not os.path.exists(args.output_path):
        os.makedirs(args.output_path)

    # Initialise logger
    FORMAT="%(asctime)s.%(msecs)03d %(levelname)s = (%(module)s) %(message)s"
    if args.output_path is not None:
        logging.basicConfig(level=args.log_level, filename=os.path.join(args.output_path,"fpgadense.log"),
                format=FORMAT, filemode="w", datefmt='%H:%M:%S', force=True)
    else:
        logging.basicConfig(level=args.log_level, format=FORMAT, datefmt='%H:%M:%S', force=True)

    # load the network description
    config = load_config(args.config_path)
    net, data, weights, biases = build_network(config)

    # evaluate the network
    outputs = net.functional_model(data, weights, biases, return_intermediate=True)

    # create report
    report = net.report()
    report["input"] = data
    for layer_info, output in zip(report["layers"], outputs):
        binary_point = layer_info["data_t"]["binary_point"]
        layer_info["output"] = output.tolist()
        layer_info["output_real"] = [ from_fixed(o, binary_point) for o in output.tolist() ]
    if not args.intermediate:
        report["layers"] = [ { k: v for k, v in info.items() if k not in ["output", "output_real"] }
                for info in report["layers"] ]
    report["output"] = outputs[-1].tolist()
    report["output_real"] = [ from_fixed(o, net.output_t.binary_point) for o in report["output"] ]

    # print the result
    print(json.dumps({ k: report[k] for k in ["output", "output_real"] }))

    # save the report and topology
    if args.output_path is not None:
        with open(os.path.join(args.output_path,"report.json"), "w") as f:
            json.dump(report, f, indent=2)
        net.visualise().write_raw(os.path.join(args.output_path,"topology.dot"))

    return report

if __name__ == "__main__":
    main()
