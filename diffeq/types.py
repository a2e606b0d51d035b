from typing import Tuple, Union, NamedTuple

import numpy as np

StateVariable = Union[float, np.ndarray]
ModelState = Tuple[StateVariable, ...]
State = ModelState


class Tolerance(NamedTuple):
    """Absolute and relative error tolerance pair for adaptive integration."""
    atol: float
    rtol: float
