# utils/initializer.py

import numpy as np
import logging
from utils.geometry import Grid
from utils.time_parameters import TimeParameters
from utils.errors import ConfigurationError
from methods.fem import FEM
from physics.diffusion import (
    ConstantDiffusionModel,
    DiffusionParameters,
    NonlinearDiffusionModel,
)
from solvers.fem_solver import FEMSolver

logger = logging.getLogger(__name__)


def initialize_simulation(input_deck):
    logger.info(f"Time Step: {input_deck.simulation.time_step} s")
    logger.info(f"Number of Time Steps: {input_deck.simulation.num_time_steps}")
    logger.info(f"Domain Length: {input_deck.geometry.length} m")
    logger.info(f"Number of Nodes: {input_deck.geometry.n_nodes}")
    logger.info(f"Diffusion Model: {input_deck.model.type}")

    grid = Grid(
        n_nodes=input_deck.geometry.n_nodes,
        length=input_deck.geometry.length,
    )
    time_params = TimeParameters(
        time_step=input_deck.simulation.time_step,
        num_time_steps=input_deck.simulation.num_time_steps,
    )
    fem = FEM(grid)
    model = initialize_model(input_deck)
    initial_solution = initialize_solution(input_deck, grid)

    solver = FEMSolver(
        grid=grid,
        time_params=time_params,
        model=model,
        method=fem,
        initial_solution=initial_solution,
    )

    return {
        "grid": grid,
        "time_params": time_params,
        "fem": fem,
        "model": model,
        "solver": solver,
        "post_processing_params": input_deck.post_processing.model_dump(),
    }


def initialize_model(input_deck):
    params = input_deck.model
    if params.type == "nonlinear":
        return NonlinearDiffusionModel(
            DiffusionParameters(
                a=params.a,
                b=params.b,
                left_value=params.left_value,
                right_value=params.right_value,
            )
        )
    elif params.type == "constant":
        return ConstantDiffusionModel(
            diffusivity=params.diffusivity,
            left_value=params.left_value,
            right_value=params.right_value,
        )
    else:
        raise ValueError(f"Invalid diffusion model: {params.type}")


def initialize_solution(input_deck, grid):
    initial = input_deck.initial_condition
    u0 = np.full(grid.n_nodes, initial.value, dtype=float)
    for point in initial.perturbations:
        if point.node >= grid.n_nodes:
            raise ConfigurationError(
                f"Perturbed node {point.node} is outside the grid ({grid.n_nodes} nodes)."
            )
        u0[point.node] = point.value
    logger.debug(f"Initial solution: {u0}")
    return u0
