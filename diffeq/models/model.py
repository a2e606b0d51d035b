from typing import Dict, Any, Text, List, Callable

import numpy as np

from diffeq.constants import ModelMetadataKeys
from diffeq.models.base_model import BaseModel
from diffeq.models import messages
from diffeq.types import StateVariable
from diffeq.utils.import_utils import import_func_from_module

ODEFunction = Callable[..., StateVariable]


class ODEModel(BaseModel):
    """
    Base class for all ODE models.

    An ODEModel implements the right-hand side (RHS) ``f`` of an ordinary differential equation ::

        y'(x) = f(x, y).

    The right-hand side may be called many times per step, at intermediate stage positions that
    are not monotonic in x, so it should be free of side effects.

    Attributes:
        ode_fn: Right-hand side of the ODE.
        fn_args: Dict with additional keyword arguments for the ode_fn.
        dim_names: Optional list of dimension names for result data saving. These will become column
         headers in result pandas.DataFrame objects.
    """

    def __init__(self,
                 ode_fn: ODEFunction = None,
                 module_path: Text = None,
                 ode_fn_name: Text = None,
                 fn_args: Dict[Text, Any] = None,
                 dim_names: List[Text] = None) -> None:
        """
        ODEModel constructor.

        Args:
            ode_fn: Callable implementing the right-hand side of the model.
            module_path: Optional, import path of a module where the right-hand side is
             defined. May be used instead of the direct function definition.
            ode_fn_name: Name of the function to be used as ode_fn. Needs to be present in the module
             specified in the module_path argument.
            fn_args: Additional keyword arguments for ode_fn.
            dim_names: Optional list of dimension names for result data saving. These will become column
             headers in result pandas.DataFrame objects.
        """
        if not any([bool(module_path), bool(ode_fn_name), bool(ode_fn)]):
            raise ValueError(messages.MISSING_INFO)

        if any([bool(module_path), bool(ode_fn_name)]) and bool(ode_fn):
            raise ValueError(messages.BAD_MODEL_DEF)

        if bool(ode_fn):
            self.ode_fn = ode_fn
        else:
            self.ode_fn = import_func_from_module(module_path, ode_fn_name)

        # additional arguments for the function
        self.fn_args = fn_args or {}

        self.dim_names = dim_names or []

    def update_args(self, **kwargs):
        """
        Update the model's keyword arguments.

        Args:
            **kwargs: Updated keyword arguments to replace the old ones.
        """
        self.fn_args.update(kwargs)

    def make_state(self, x: StateVariable, y: StateVariable):
        """
        Constructs a state object from raw input floats and numpy arrays.

        Args:
            x: Independent variable at the current state.
            y: State vector at the current state.

        Returns:
            A state object representing the current model state.
        """
        return float(x), np.array(y, dtype=float, ndmin=1)

    def get_metadata(self):
        """
        Return model metadata information. Used for constructing result pandas DataFrame objects.

        Returns:
            A dict with model metadata information.
        """
        return {ModelMetadataKeys.DIM_NAMES: self.dim_names}

    def __call__(self, x: float, y: np.ndarray) -> np.ndarray:
        """
        ODE model call operator.

        Args:
            x: Independent variable at the current state.
            y: State vector at the current state.

        Returns:
            A float array holding the right-hand side given by the ode_fn
             at the input state.

        """
        dydx = np.asarray(self.ode_fn(x, y, **self.fn_args), dtype=float)

        if dydx.shape != y.shape:
            raise ValueError(messages.DIMENSION_MISMATCH.format(dydx.size, y.size))

        return dydx
