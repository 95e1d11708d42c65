import os
import numpy as np


def display_solution(state):
    for i, x, u in state.nodal_values():
        print(f"x[{i}] = {x}, u[{i}] = {u}")


def save_post_processing(simulation_objects, state):
    if simulation_objects["post_processing_params"]["output"]:
        output_dir = simulation_objects["post_processing_params"]["output_dir"]
        os.makedirs(output_dir, exist_ok=True)
        file_prefix = simulation_objects["post_processing_params"]["file_prefix"]

        np.save(os.path.join(output_dir, f"{file_prefix}_X.npy"), state.x)
        np.save(os.path.join(output_dir, f"{file_prefix}_SOLUTION.npy"), state.u)
        np.save(
            os.path.join(output_dir, f"{file_prefix}_TIME.npy"),
            np.array([state.time]),
        )
