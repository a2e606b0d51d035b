import numpy as np
import pytest

from diffeq.stepsize_control import EmbeddedErrorController

H = 0.5


def _call(sc, error_norm, rejected=False, error_order=4):
    # zero state and atol=1 make the scale one, so the error norm is |error * h|
    state = (0.0, np.zeros(1))
    new_state = (H, np.zeros(1))
    error_estimate = np.array([error_norm / H])

    return sc(H, state, new_state, error_estimate, error_order, rejected)


@pytest.fixture
def sc():
    return EmbeddedErrorController(atol=1.0, rtol=1e-3)


def test_error_norm_is_scaled_rms(sc):
    y = np.array([1.0, -2.0])
    y_new = np.array([3.0, 0.5])
    error_estimate = np.array([0.1, 0.2])
    h = 2.0

    scale = 1.0 + 1e-3 * np.array([3.0, 2.0])
    expected = np.sqrt(np.mean((error_estimate * h / scale) ** 2))

    assert sc.error_norm(h, y, y_new, error_estimate) == pytest.approx(expected)


def test_reject_shrinks_step(sc):
    accepted, h_new, err = _call(sc, 4.0)

    assert not accepted
    assert err == pytest.approx(4.0)
    assert h_new == pytest.approx(H * 0.9 * 4.0 ** -0.2)
    assert h_new < H


def test_reject_shrink_is_bounded(sc):
    accepted, h_new, _ = _call(sc, 1e10)

    assert not accepted
    assert h_new == pytest.approx(H * 0.2)


def test_error_norm_of_one_is_rejected(sc):
    accepted, _, _ = _call(sc, 1.0)

    assert not accepted


def test_accept_grows_step(sc):
    accepted, h_new, _ = _call(sc, 0.5)

    assert accepted
    assert h_new == pytest.approx(H * 0.9 * 0.5 ** -0.2)
    assert h_new > H


def test_accept_growth_is_bounded(sc):
    accepted, h_new, _ = _call(sc, 1e-12)

    assert accepted
    assert h_new == pytest.approx(H * 10.0)


def test_zero_error_uses_max_factor(sc):
    accepted, h_new, err = _call(sc, 0.0)

    assert accepted
    assert err == 0.0
    assert h_new == pytest.approx(H * 10.0)


def test_no_growth_after_rejection(sc):
    accepted, h_new, _ = _call(sc, 1e-6, rejected=True)

    assert accepted
    assert h_new == pytest.approx(H)

    # shrinking is still possible after a rejection
    accepted, h_new, _ = _call(sc, 0.99, rejected=True)

    assert accepted
    assert h_new == pytest.approx(H * 0.9 * 0.99 ** -0.2)
    assert h_new < H


def test_exponent_depends_on_error_order(sc):
    _, h_new, _ = _call(sc, 0.5, error_order=2)

    assert h_new == pytest.approx(H * 0.9 * 0.5 ** (-1 / 3))


@pytest.mark.parametrize("value", [np.nan, np.inf])
def test_non_finite_error_is_rejected(sc, value):
    accepted, h_new, err = _call(sc, value)

    assert not accepted
    assert not np.isfinite(err)
    assert h_new == pytest.approx(H * 0.2)


@pytest.mark.parametrize("atol, rtol", [(0.0, 1e-3), (1e-6, -1.0)])
def test_non_positive_tolerance_raises(atol, rtol):
    with pytest.raises(ValueError):
        EmbeddedErrorController(atol=atol, rtol=rtol)
