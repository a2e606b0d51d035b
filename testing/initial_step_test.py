import numpy as np
import pytest

from diffeq.models import ODEModel
from diffeq.stepsize_control import select_initial_step, EmbeddedErrorController


def test_stationary_problem_takes_tiny_step():
    model = ODEModel(ode_fn=lambda x, y: np.zeros_like(y))

    h = select_initial_step(model, (0.0, np.zeros(2)), end=10.0, atol=1e-6, rtol=1e-3, error_order=4)

    assert h == pytest.approx(1e-6)


def test_initial_step_bounded_by_interval():
    model = ODEModel(ode_fn=lambda x, y: np.zeros_like(y))

    h = select_initial_step(model, (0.0, np.zeros(1)), end=1e-8, atol=1e-6, rtol=1e-3, error_order=4)

    assert h == pytest.approx(1e-8)

    model = ODEModel(ode_fn=lambda x, y: -y)

    h = select_initial_step(model, (1.0, np.ones(1)), end=1.001, atol=1e-6, rtol=1e-3, error_order=4)

    assert 0 < h <= 0.001 + 1e-15


def test_initial_step_for_linear_system():
    model = ODEModel(ode_fn=lambda x, y: np.array([y[1] + x, y[0]]))
    sc = EmbeddedErrorController()

    h = sc.initial_step(model, (0.0, np.array([1.0, -1.0])), end=4.0, error_order=4)

    # (0.01 / d2) ** (1/5), with d2 from the explicit Euler probe
    assert h == pytest.approx(0.0913, abs=1e-3)


def test_initial_step_shrinks_with_tolerance():
    model = ODEModel(ode_fn=lambda x, y: np.array([-y[1], y[0]]))
    state = (0.0, np.array([1.0, 1.0]))

    h_loose = select_initial_step(model, state, end=4.0, atol=1e-3, rtol=1e-3, error_order=4)
    h_tight = select_initial_step(model, state, end=4.0, atol=1e-9, rtol=1e-9, error_order=4)

    assert 0 < h_tight < h_loose
