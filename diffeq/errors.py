__all__ = ["StepTooSmallError"]


class StepTooSmallError(RuntimeError):
    """
    Raised when the step size controller has to shrink the step size below the floating point
    resolution at the current position without reaching an acceptable local error.

    Attributes:
        x: Position of the step that could not be completed.
        h: The rejected step size.
        xs: Partial trajectory positions accepted before the failure, if available.
        ys: Partial trajectory states accepted before the failure, if available.
    """

    def __init__(self, x: float, h: float):
        super(StepTooSmallError, self).__init__(
            "Step size {h:g} at x = {x:g} fell below the minimum representable step. "
            "Consider loosening the tolerances or checking the model for stiffness "
            "or non-finite derivatives.".format(h=h, x=x))
        self.x = x
        self.h = h
        self.xs = None
        self.ys = None
