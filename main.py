# main.py
import os
import logging
import argparse
from parsers.input_parser import InputDeck
from utils.initializer import initialize_simulation
from utils.writer import display_solution, save_post_processing


def setup_logging():
    """Configure logging to file and console."""
    log_dir = "logs"
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "simulation.log")

    # Define logging format
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Configure the root logger
    logging.basicConfig(
        level=logging.DEBUG,  # Set to DEBUG to capture all levels
        format=log_format,
        handlers=[
            logging.FileHandler(log_file, mode="w"),  # Overwrite log file each run
            logging.StreamHandler(),  # Also output to console
        ],
    )


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Run the diffusion simulation.")
    parser.add_argument(
        "input_deck_path",
        type=str,
        help="Path to the input deck YAML file.",
    )
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()

    # Parse the input deck
    input_deck = InputDeck.from_yaml(args.input_deck_path)

    simulation_objects = initialize_simulation(input_deck)

    final_state = simulation_objects["solver"].solve()
    display_solution(final_state)

    # Save post-processing data
    save_post_processing(simulation_objects, final_state)


if __name__ == "__main__":
    main()
