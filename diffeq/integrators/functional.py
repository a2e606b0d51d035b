from typing import Callable, Sequence, Tuple, Union

import numpy as np

from diffeq import defaults
from diffeq.integrators.integrator_loops import adaptive_h_loop
from diffeq.models import BaseModel, ODEModel
from diffeq.stepfunctions import StepFunction, DormandPrince45
from diffeq.stepsize_control import EmbeddedErrorController
from diffeq.types import Tolerance
from diffeq.utils.data_utils import trajectory_to_arrays

__all__ = ["integrate", "dormand_prince"]


def integrate(derivative: Union[Callable, BaseModel],
              x_span: Tuple[float, float],
              y0: Sequence[float],
              tolerance: Tuple[float, float] = None,
              method: StepFunction = None,
              progress_bar: bool = False) -> Tuple[np.ndarray, np.ndarray]:
    """
    Solve the initial value problem y' = f(x, y), y(x0) = y0 on the interval x_span adaptively.

    Args:
        derivative: Right-hand side f(x, y), either as a callable or as an ODEModel.
        x_span: Tuple (x0, x_end) with x_end >= x0. An empty interval yields the single point x0.
        y0: Initial state vector.
        tolerance: Tuple (atol, rtol) of absolute and relative error tolerance. Defaults to
         (1e-6, 1e-3).
        method: Embedded Runge-Kutta step function. Defaults to DormandPrince45.
        progress_bar: Whether to display a progress bar.

    Returns:
        A tuple (xs, ys) of parallel arrays. xs is strictly increasing, starts at x0 and ends at
        x_end exactly; ys[i] is the state at xs[i].

    Raises:
        StepTooSmallError: If the step size control fails to complete a step.
        ValueError: If the problem is mis-specified.
    """
    tolerance = Tolerance(*tolerance) if tolerance is not None else Tolerance(defaults.ATOL, defaults.RTOL)

    model = derivative if isinstance(derivative, BaseModel) else ODEModel(ode_fn=derivative)

    step_func = method or DormandPrince45()

    sc = EmbeddedErrorController(atol=tolerance.atol, rtol=tolerance.rtol)

    start, end = x_span

    result = adaptive_h_loop(step_func=step_func,
                             model=model,
                             sc=sc,
                             initial_state=model.make_state(start, y0),
                             end=float(end),
                             progress_bar=progress_bar)

    return trajectory_to_arrays(result)


def dormand_prince(derivative: Union[Callable, BaseModel],
                   x_span: Tuple[float, float],
                   y0: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Solve an initial value problem with the Dormand-Prince method and default tolerances.
    See ``integrate``.
    """
    return integrate(derivative, x_span, y0, method=DormandPrince45())
