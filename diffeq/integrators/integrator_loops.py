import copy
import logging
from typing import List, Tuple, Dict, Text, Any

import numpy as np
from tqdm import tqdm

from diffeq import defaults
from diffeq.callbacks import Callback
from diffeq.errors import StepTooSmallError
from diffeq.metrics import Metric
from diffeq.models import BaseModel
from diffeq.stepfunctions import StepFunction
from diffeq.stepsize_control import StepSizeController
from diffeq.types import State
from diffeq.utils.data_utils import trajectory_to_arrays

__all__ = ["min_step_size", "adaptive_step", "adaptive_h_loop"]

logger = logging.getLogger(__name__)


def min_step_size(x: float) -> float:
    """Smallest step size still distinguishable from x in floating point, with some headroom."""
    return defaults.MIN_STEP_ULPS * abs(np.nextafter(x, np.inf) - x)


def adaptive_step(step_func: StepFunction,
                  model: BaseModel,
                  sc: StepSizeController,
                  state: State,
                  h: float,
                  end: float) -> Tuple[State, float, float, int]:
    """
    Advance a state by one accepted step, retrying with smaller step sizes as long as the step
    size controller rejects the result.

    Args:
        step_func: Adaptive step function computing a new state and a local error estimate.
        model: ODE model to integrate.
        sc: Step size controller deciding on acceptance and the next step size.
        state: Current state (x, y).
        h: Proposed step size.
        end: End of the integration interval. A step overshooting it is shortened to land on
         it exactly.

    Returns:
        A tuple (new_state, h_next, error_norm, num_rejected) with the accepted state, the step
        size proposed for the next step, the error norm of the accepted step and the number of
        rejected attempts.

    Raises:
        StepTooSmallError: If the step size falls below the floating point resolution at x.
    """
    x, _ = step_func.get_data_from_state(state)

    h_min = min_step_size(x)
    rejected = False
    num_rejected = 0

    while True:
        # also catches NaN step sizes
        if not h >= h_min:
            raise StepTooSmallError(x=x, h=h)

        last_step = x + h > end
        if last_step:
            h = end - x

        new_state, error_estimate = step_func.forward(model, state, h)

        accepted, h_new, err = sc(h, state, new_state, error_estimate,
                                  step_func.error_order, rejected)

        if accepted:
            if last_step:
                _, y_new = step_func.get_data_from_state(new_state)
                new_state = step_func.make_new_state(x=end, y=y_new)

            return new_state, h_new, err, num_rejected

        logger.debug("Rejected step at x={:.6g} with h={:.6g}, error norm {:.4g}. "
                     "Retrying with h={:.6g}.".format(x, h, err, h_new))

        rejected = True
        num_rejected += 1
        h = h_new


def validate_adaptive_loop(state: State, end: float):
    _error_msg = []

    x, y = state

    if np.ndim(y) != 1 or len(y) == 0:
        _error_msg.append("the initial state vector must be one-dimensional and non-empty")

    if not np.all(np.isfinite(y)):
        _error_msg.append("the initial state vector must be finite")

    if not end >= x:
        _error_msg.append("the upper integration bound must not be smaller than the "
                          "starting value")

    if _error_msg:
        raise ValueError("This integration run is mis-configured: {}.".format("; ".join(_error_msg)))


def adaptive_h_loop(step_func: StepFunction,
                    model: BaseModel,
                    sc: StepSizeController,
                    initial_state: State,
                    end: float,
                    h: float = None,
                    callbacks: List[Callback] = None,
                    metrics: List[Metric] = None,
                    progress_bar: bool = False) -> List[Tuple[float, np.ndarray, Dict[Text, Any]]]:
    """
    Integrate a model adaptively from its initial state up to exactly ``end``.

    Args:
        step_func: Adaptive step function.
        model: ODE model to integrate.
        sc: Step size controller.
        initial_state: Initial state (x0, y0).
        end: End of the integration interval.
        h: Initial step size. If not given, it is estimated by the step size controller.
        callbacks: Callbacks to execute after each accepted step.
        metrics: Metrics to calculate after each accepted step.
        progress_bar: Whether to display a progress bar over the integration interval.

    Returns:
        A list of (x, y, metrics) tuples, starting with the initial state and ending at ``end``.

    Raises:
        StepTooSmallError: If a step cannot be completed. The partial trajectory is attached to
         the exception as its ``xs`` and ``ys`` attributes.
    """
    callbacks = callbacks or []
    metrics = metrics or []

    # deepcopy here, otherwise the initial state gets overwritten
    state = copy.deepcopy(initial_state)

    validate_adaptive_loop(state=state, end=end)

    start, y0 = state

    # treat initial state as state 0
    result = [(start, y0, {})]

    # empty interval, the initial state is the whole trajectory
    if end == start:
        return result

    if h is None:
        h = sc.initial_step(model, state, end, step_func.error_order)

    i = 0

    try:
        with tqdm(total=end - start, disable=not progress_bar) as pbar:
            while state[0] < end:
                i += 1

                new_state, h_next, err, num_rejected = adaptive_step(step_func=step_func,
                                                                     model=model,
                                                                     sc=sc,
                                                                     state=state,
                                                                     h=h,
                                                                     end=end)

                x, _ = state
                x_new, y_new = new_state

                new_metrics = {defaults.step_size: x_new - x,
                               defaults.error_norm: err,
                               defaults.rejected: num_rejected}

                for metric in metrics:
                    new_metrics[metric.__name__] = metric(i, state, new_state, model, locals())

                # execute the registered callbacks after the step
                for callback in callbacks:
                    callback(i, state, new_state, model, locals())

                result.append((x_new, y_new, new_metrics))

                pbar.update(x_new - x)

                # update delayed after callback execution
                state, h = new_state, h_next

    except StepTooSmallError as e:
        e.xs, e.ys = trajectory_to_arrays(result)
        raise

    return result
