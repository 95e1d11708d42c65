# parsers/input_parser.py

from dataclasses import dataclass
from typing import List, Literal, Optional
import yaml
from pydantic import BaseModel, Field, ValidationError


class SimulationModel(BaseModel):
    time_step: float = Field(gt=0.0)
    num_time_steps: int = Field(ge=0)


class GeometryModel(BaseModel):
    length: float = Field(gt=0.0)
    n_nodes: int = Field(ge=2)


class DiffusionLawModel(BaseModel):
    type: Literal["nonlinear", "constant"] = "nonlinear"
    a: float = 1.0
    b: float = 0.5
    diffusivity: float = Field(default=1.0, gt=0.0)
    left_value: float = 1.0
    right_value: float = 1.0


class PerturbationModel(BaseModel):
    node: int = Field(ge=0)
    value: float


class InitialConditionModel(BaseModel):
    value: float = 1.0
    perturbations: List[PerturbationModel] = []


class PostProcessingModel(BaseModel):
    output: bool = False
    output_dir: str = "output"
    file_prefix: str = "diffusion"


class InputDeckModel(BaseModel):
    simulation: SimulationModel
    geometry: GeometryModel
    model: DiffusionLawModel = DiffusionLawModel()
    initial_condition: InitialConditionModel = InitialConditionModel()
    post_processing: PostProcessingModel = PostProcessingModel()


@dataclass
class InputDeck:
    simulation: SimulationModel
    geometry: GeometryModel
    model: DiffusionLawModel
    initial_condition: InitialConditionModel
    post_processing: PostProcessingModel

    @staticmethod
    def from_dict(data: Optional[dict]) -> 'InputDeck':
        try:
            input_model = InputDeckModel(**(data or {}))
        except ValidationError as e:
            print("Input Deck Validation Error:")
            print(e.json())
            raise e

        return InputDeck(
            simulation=input_model.simulation,
            geometry=input_model.geometry,
            model=input_model.model,
            initial_condition=input_model.initial_condition,
            post_processing=input_model.post_processing,
        )

    @staticmethod
    def from_yaml(file_path: str) -> 'InputDeck':
        with open(file_path, 'r') as f:
            data = yaml.safe_load(f)
        return InputDeck.from_dict(data)
