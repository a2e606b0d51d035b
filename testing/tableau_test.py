import numpy as np
import pytest

from diffeq.models import ODEModel
from diffeq.stepfunctions import ButcherTableau, DormandPrince45, BogackiShampine32


@pytest.mark.parametrize("method", [DormandPrince45(), BogackiShampine32()])
def test_tableau_consistency(method):
    c, a, b, e = method.tableau

    assert a.shape == (method.num_stages, method.num_stages)
    assert len(b) == len(e) == method.num_stages

    np.testing.assert_allclose(a.sum(axis=1), c, atol=1e-14)
    assert b.sum() == pytest.approx(1.0, abs=1e-14)
    # both solutions of the pair are consistent, so the error weights sum to zero
    assert e.sum() == pytest.approx(0.0, abs=1e-14)

    np.testing.assert_array_equal(a, np.tril(a, k=-1))


def test_dopri_tableau_shape():
    method = DormandPrince45()

    assert method.num_stages == 7
    assert method.error_order == 4
    # first same as last: the propagated weights are the last coupling row
    np.testing.assert_allclose(method.tableau.a[-1], method.tableau.b)


def test_tableau_is_read_only():
    tableau = DormandPrince45().tableau

    with pytest.raises(ValueError):
        tableau.b[0] = 1.0


def test_invalid_tableau_raises():
    with pytest.raises(ValueError, match="lower triangular"):
        ButcherTableau.create(c=[0., 1.], a=[[0., 1.], [1., 0.]], b=[0.5, 0.5], e=[0., 0.])

    with pytest.raises(ValueError, match="one entry per stage"):
        ButcherTableau.create(c=[0., 1.], a=[[], [1.]], b=[0.5, 0.5], e=[0.])

    with pytest.raises(ValueError, match="one row per stage"):
        ButcherTableau.create(c=[0., 1.], a=[[]], b=[0.5, 0.5], e=[0., 0.])


def test_from_embedded_pair():
    tableau = ButcherTableau.from_embedded_pair(c=[0., 1.], a=[[], [1.]], b=[0.5, 0.5], b_hat=[1., 0.])

    np.testing.assert_allclose(tableau.e, [-0.5, 0.5])


def test_dopri_single_step_accuracy():
    model = ODEModel(ode_fn=lambda x, y: y)
    y = np.ones(1)

    (x_new, y_new), error_estimate = DormandPrince45().forward(model, (0.0, y), 0.1)

    assert x_new == pytest.approx(0.1)
    assert y_new[0] == pytest.approx(np.exp(0.1), abs=1e-8)
    assert np.abs(error_estimate[0]) * 0.1 < 1e-6
    # input state is left untouched
    np.testing.assert_array_equal(y, np.ones(1))


def test_dopri_exact_for_quartic_integrand():
    model = ODEModel(ode_fn=lambda x, y: 5 * x ** 4 * np.ones_like(y))
    h = 0.5

    (_, y_new), _ = DormandPrince45().forward(model, (0.0, np.zeros(2)), h)

    np.testing.assert_allclose(y_new, h ** 5, rtol=1e-13)


def test_constant_derivative_has_no_error():
    model = ODEModel(ode_fn=lambda x, y: np.full_like(y, 3.0))

    for method in [DormandPrince45(), BogackiShampine32()]:
        (_, y_new), error_estimate = method.forward(model, (1.0, np.zeros(3)), 0.25)

        np.testing.assert_allclose(y_new, 0.75)
        np.testing.assert_allclose(error_estimate, 0.0, atol=1e-13)


def test_non_finite_derivative_propagates_to_error_estimate():
    model = ODEModel(ode_fn=lambda x, y: np.full_like(y, np.nan))

    _, error_estimate = DormandPrince45().forward(model, (0.0, np.ones(2)), 0.1)

    assert np.all(np.isnan(error_estimate))
