# plotter.py

import numpy as np
import os
import argparse
import matplotlib.pyplot as plt
from parsers.input_parser import InputDeck


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Plot the simulation results.")
    parser.add_argument(
        "input_deck_path",
        type=str,
        help="Path to the input deck YAML file.",
    )
    return parser.parse_args()


def main():
    args = parse_args()

    # Parse the input deck
    input_deck = InputDeck.from_yaml(args.input_deck_path)

    if not input_deck.post_processing.output:
        print("Post-processing output is disabled in the input deck.")
        return

    output_dir = input_deck.post_processing.output_dir
    file_prefix = input_deck.post_processing.file_prefix

    x = np.load(os.path.join(output_dir, f"{file_prefix}_X.npy"))
    u = np.load(os.path.join(output_dir, f"{file_prefix}_SOLUTION.npy"))
    time = np.load(os.path.join(output_dir, f"{file_prefix}_TIME.npy"))[0]

    plt.figure()
    plt.plot(x, u, marker="o", label=f"u(x, t={time:g} s)")
    plt.xlabel("Position [m]")
    plt.ylabel("Solution [-]")
    plt.legend()
    plt.show()


if __name__ == "__main__":
    main()
