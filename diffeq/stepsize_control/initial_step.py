import logging

import numpy as np

from diffeq.models import BaseModel
from diffeq.types import ModelState

__all__ = ["rms_norm", "select_initial_step"]

logger = logging.getLogger(__name__)


def rms_norm(x: np.ndarray) -> float:
    """Root mean square norm of a state-shaped array."""
    return np.sqrt(np.mean(np.square(x)))


def select_initial_step(model: BaseModel,
                        state: ModelState,
                        end: float,
                        atol: float,
                        rtol: float,
                        error_order: int) -> float:
    """
    Estimate a first step size from the scale of the initial derivative and a single explicit
    Euler probe step.

    Follows E. Hairer, S. P. Norsett, G. Wanner, "Solving Ordinary Differential Equations I:
    Nonstiff Problems", Sec. II.4.

    Args:
        model: ODE model to integrate.
        state: Initial state (x0, y0).
        end: End of the integration interval.
        atol: Absolute error tolerance.
        rtol: Relative error tolerance.
        error_order: Order of the error estimate of the step function in use.

    Returns:
        A positive initial step size, not larger than the interval length.
    """
    x0, y0 = state
    interval = end - x0

    f0 = model(x0, y0)

    scale = atol + rtol * np.abs(y0)

    d0 = rms_norm(y0 / scale)
    d1 = rms_norm(f0 / scale)

    # nearly stationary start, take a small cautious step
    if d0 < 1e-5 or d1 < 1e-6:
        h0 = 1e-6
    else:
        h0 = 0.01 * d0 / d1

    h0 = min(h0, interval)

    # explicit Euler probe to estimate the second derivative
    y1 = y0 + h0 * f0
    f1 = model(x0 + h0, y1)

    d2 = rms_norm((f1 - f0) / scale) / h0

    if d1 <= 1e-15 and d2 <= 1e-15:
        h1 = max(1e-6, h0 * 1e-3)
    else:
        h1 = (0.01 / max(d1, d2)) ** (1. / (error_order + 1))

    h = min(100 * h0, h1, interval)

    logger.debug("Selected initial step size {:.6g} (d0={:.3g}, d1={:.3g}, d2={:.3g}).".format(
        h, d0, d1, d2))

    return float(h)
