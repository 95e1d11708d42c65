# methods/method.py
import numpy as np
from abc import ABC, abstractmethod
from scipy.sparse import spmatrix


class Method(ABC):
    @abstractmethod
    def build_stif(self, k: np.ndarray) -> spmatrix:
        pass

    @abstractmethod
    def build_mass(self, m: np.ndarray) -> spmatrix:
        pass
