from typing import Tuple

import numpy as np

from diffeq.models import BaseModel
from diffeq.stepfunctions.tableau import ButcherTableau
from diffeq.types import ModelState

__all__ = ["SingleStepMethod",
           "EmbeddedRungeKuttaMethod"]


class SingleStepMethod:
    """
    Base class for all adaptive single step functions for ODE solving. Override this class and its
    methods to make your own custom single-step functions.

    An adaptive single-step method advances a state by one step and additionally returns an
    estimate of the local truncation error of that step, which is used by step size controllers.
    """
    # order of the local error estimate, used in step size scaling
    error_order = 0

    @staticmethod
    def get_data_from_state(state: ModelState):
        """
        Custom member function for getting the raw numpy-compatible data from a ModelState object.
        Override this if you intend to use a custom state type such as a NamedTuple.

        Args:
            state: State object holding the numpy-compatible data.

        Returns:
            Raw numpy-compatible state data for use in the forward member function.
        """
        return state

    @staticmethod
    def make_new_state(x: float, y: np.ndarray) -> ModelState:
        """
        Custom function for constructing a new state from numpy data.
        Override this if you intend to use a custom state type such as a NamedTuple.

        Args:
            x: Independent variable at the new state.
            y: State vector at the new state.

        Returns:
            A new state object holding the raw data.
        """
        return x, y

    def forward(self,
                model: BaseModel,
                state: ModelState,
                h: float,
                **kwargs) -> Tuple[ModelState, np.ndarray]:
        """
        Main method to advance an ODE by computing a new state using a single-step method.
        Override this to define your own single-step functions.

        Args:
            model: ODEModel object implementing the ODE model.
            state: Input state.
            h: Step size to use in the step function.
            **kwargs: Additional keyword arguments, unused for now.

        Returns:
            A tuple (new_state, error_estimate) holding the state at x+h and the local truncation
            error estimate of the step, per unit step size.
        """
        raise NotImplementedError


class EmbeddedRungeKuttaMethod(SingleStepMethod):
    """
    Base class template for embedded explicit Runge-Kutta (RK) methods.

    An embedded RK pair computes two solutions of different order from the same s stage
    evaluations. The higher order solution is propagated, while the difference of the two
    estimates the local truncation error of the step.

    For more information on embedded Runge-Kutta methods and the Butcher tableau, see
    https://en.wikipedia.org/wiki/Runge%E2%80%93Kutta_methods#Adaptive_Runge%E2%80%93Kutta_methods.
    """
    def __init__(self, tableau: ButcherTableau, error_order: int):
        """
        Embedded Runge-Kutta method constructor.

        Args:
            tableau: Butcher tableau of the embedded pair.
            error_order: Order of the embedded error estimate.
        """
        self.tableau = tableau
        self.error_order = error_order
        self.num_stages = tableau.num_stages

    def forward(self,
                model: BaseModel,
                state: ModelState,
                h: float,
                **kwargs) -> Tuple[ModelState, np.ndarray]:
        """
        Main method to advance an ODE by computing a new state with a multi-stage embedded
        Runge-Kutta method.

        This function is templated and not meant to be directly overridden. If you want more
        control over your step function, consider subclassing ``SingleStepMethod`` instead.

        All stages are recomputed on every call and no data is kept between calls, so the
        method can be used to retry a rejected step with a different step size.

        Args:
            model: ODEModel object implementing the ODE model.
            state: Input state.
            h: Step size to use in the step function.
            **kwargs: Additional keyword arguments, unused for now.

        Returns:
            A tuple (new_state, error_estimate) holding the state at x+h and the local truncation
            error estimate of the step, per unit step size.
        """
        x, y = self.get_data_from_state(state=state)

        c, a, b, e = self.tableau

        k = np.zeros((self.num_stages, len(y)))

        for i in range(self.num_stages):
            # rows of a are zero from the diagonal on, so only finished stages contribute
            k[i] = model(x + c[i] * h, y + h * np.dot(a[i], k))

        y_new = y + h * np.dot(b, k)

        error_estimate = np.dot(e, k)

        return self.make_new_state(x=x + h, y=y_new), error_estimate
