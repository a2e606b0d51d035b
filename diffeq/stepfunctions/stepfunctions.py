from diffeq.stepfunctions.tableau import ButcherTableau
from diffeq.stepfunctions.templates import EmbeddedRungeKuttaMethod

__all__ = ["DormandPrince45",
           "BogackiShampine32"]


# Dormand-Prince 5(4), see
# https://en.wikipedia.org/wiki/Dormand%E2%80%93Prince_method
DOPRI45_TABLEAU = ButcherTableau.create(
    c=[0., 1 / 5, 3 / 10, 4 / 5, 8 / 9, 1., 1.],
    a=[[],
       [1 / 5],
       [3 / 40, 9 / 40],
       [44 / 45, -56 / 15, 32 / 9],
       [19372 / 6561, -25360 / 2187, 64448 / 6561, -212 / 729],
       [9017 / 3168, -355 / 33, 46732 / 5247, 49 / 176, -5103 / 18656],
       [35 / 384, 0., 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84]],
    b=[35 / 384, 0., 500 / 1113, 125 / 192, -2187 / 6784, 11 / 84, 0.],
    # b - b_hat, with b_hat the 4th order weights
    e=[71 / 57600, 0., -71 / 16695, 71 / 1920, -17253 / 339200, 22 / 525, -1 / 40])

# Bogacki-Shampine 3(2), see
# https://en.wikipedia.org/wiki/Bogacki%E2%80%93Shampine_method
BS32_TABLEAU = ButcherTableau.from_embedded_pair(
    c=[0., 1 / 2, 3 / 4, 1.],
    a=[[],
       [1 / 2],
       [0., 3 / 4],
       [2 / 9, 1 / 3, 4 / 9]],
    b=[2 / 9, 1 / 3, 4 / 9, 0.],
    b_hat=[7 / 24, 1 / 4, 1 / 3, 1 / 8])


class DormandPrince45(EmbeddedRungeKuttaMethod):
    """
    Dormand-Prince method for explicit adaptive ODE integration. The propagated solution is
    accurate to order 5, the embedded solution used for the error estimate to order 4 (hence the
    name).

    The last stage is evaluated at the new state (First Same As Last), but it is not reused
    across steps.
    """
    def __init__(self):
        super(DormandPrince45, self).__init__(tableau=DOPRI45_TABLEAU, error_order=4)


class BogackiShampine32(EmbeddedRungeKuttaMethod):
    """
    Bogacki-Shampine method of order 3 with an embedded order 2 error estimate. Cheaper per step
    than DormandPrince45, useful for loose tolerances.
    """
    def __init__(self):
        super(BogackiShampine32, self).__init__(tableau=BS32_TABLEAU, error_order=2)
