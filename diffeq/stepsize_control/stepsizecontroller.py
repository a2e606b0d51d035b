from typing import Tuple

import numpy as np

from diffeq import defaults
from diffeq.models import BaseModel
from diffeq.stepsize_control.initial_step import rms_norm, select_initial_step
from diffeq.types import ModelState

__all__ = ["StepSizeController", "EmbeddedErrorController"]


class StepSizeController:
    """
    Base StepSizeController interface. Subclass this to define your own custom step size control
    functions.
    """

    def initial_step(self,
                     model: BaseModel,
                     state: ModelState,
                     end: float,
                     error_order: int) -> float:
        raise NotImplementedError

    def __call__(self,
                 h: float,
                 state: ModelState,
                 new_state: ModelState,
                 error_estimate: np.ndarray,
                 error_order: int,
                 rejected: bool = False) -> Tuple[bool, float, float]:
        raise NotImplementedError


class EmbeddedErrorController(StepSizeController):
    """
    Step size control for embedded Runge-Kutta pairs such as Dormand-Prince. The step size is
    regulated by a scaled RMS norm of the local error estimate obtained from two different-order
    solutions.
    """

    def __init__(self,
                 atol: float = defaults.ATOL,
                 rtol: float = defaults.RTOL,
                 fac_min: float = defaults.FAC_MIN,
                 fac_max: float = defaults.FAC_MAX,
                 safety_factor: float = defaults.SAFETY_FACTOR):
        """
        Embedded error step size control constructor.

        Args:
            atol: Absolute error tolerance in the error estimate.
            rtol: Relative error tolerance in the error estimate.
            fac_min: Maximal step size reduction factor after a rejected step.
            fac_max: Maximal step size increase factor after an accepted step.
            safety_factor: Safety factor, commonly set around 0.9.
        """
        if atol <= 0 or rtol <= 0:
            raise ValueError("Error tolerances must be positive, got atol={}, "
                             "rtol={}.".format(atol, rtol))

        self.atol = atol
        self.rtol = rtol
        self.fac_min = fac_min
        self.fac_max = fac_max
        self.safety_factor = safety_factor

    def initial_step(self,
                     model: BaseModel,
                     state: ModelState,
                     end: float,
                     error_order: int) -> float:
        """
        Estimate the first step size of an integration run. See ``select_initial_step``.
        """
        return select_initial_step(model=model,
                                   state=state,
                                   end=end,
                                   atol=self.atol,
                                   rtol=self.rtol,
                                   error_order=error_order)

    def error_norm(self,
                   h: float,
                   y: np.ndarray,
                   y_new: np.ndarray,
                   error_estimate: np.ndarray) -> float:
        """
        Scaled RMS norm of the local error of a step. A value of 1 means the error sits exactly
        at the tolerance boundary.
        """
        scale = self.atol + self.rtol * np.maximum(np.abs(y), np.abs(y_new))

        return float(rms_norm(error_estimate * h / scale))

    def __call__(self,
                 h: float,
                 state: ModelState,
                 new_state: ModelState,
                 error_estimate: np.ndarray,
                 error_order: int,
                 rejected: bool = False) -> Tuple[bool, float, float]:
        """
        Embedded error step size control call operator.

        Args:
            h: Current step size.
            state: Previous ODE state.
            new_state: New computed ODE state.
            error_estimate: Local error estimate of the step, per unit step size.
            error_order: Order of the error estimate of the step function.
            rejected: Whether an earlier attempt of the same step was rejected.

        Returns:
            A tuple (accepted, h_new, error_norm) consisting of a boolean, indicating whether or not
            the new state was accepted, the step size h_new to use next, and the scaled error norm.
            On rejection, h_new is the step size to retry the current step with.

        """
        _, y = state
        _, y_new = new_state

        err = self.error_norm(h=h, y=y, y_new=y_new, error_estimate=error_estimate)

        # NaN or inf from the model never pass as an accepted step
        if not np.isfinite(err):
            return False, h * self.fac_min, err

        exponent = -1. / (error_order + 1)

        if err < 1.:
            if err == 0.:
                factor = self.fac_max
            else:
                factor = min(self.safety_factor * err ** exponent, self.fac_max)

            # no growth right after a rejection
            if rejected:
                factor = min(1., factor)

            return True, h * factor, err

        return False, h * max(self.safety_factor * err ** exponent, self.fac_min), err
