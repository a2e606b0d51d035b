from typing import NamedTuple

import numpy as np

__all__ = ["ButcherTableau"]


class ButcherTableau(NamedTuple):
    """
    Butcher tableau of an embedded explicit Runge-Kutta pair.

    Attributes:
        c: Stage abscissae, i.e. the left column of the tableau.
        a: Strictly lower triangular stage coupling matrix.
        b: Weights of the propagated (higher order) solution.
        e: Error weights, the difference b - b_hat between the weights of the propagated
         and the embedded solution.
    """
    c: np.ndarray
    a: np.ndarray
    b: np.ndarray
    e: np.ndarray

    @property
    def num_stages(self) -> int:
        return len(self.c)

    @classmethod
    def create(cls, c, a, b, e) -> "ButcherTableau":
        """
        Build a validated, read-only tableau from nested sequences. Rows of ``a`` may be ragged,
        they are padded with zeros to a square matrix.

        Raises:
            ValueError: If the coefficients do not form an explicit embedded RK tableau.
        """
        c = np.array(c, dtype=float)
        b = np.array(b, dtype=float)
        e = np.array(e, dtype=float)

        s = len(c)
        a_mat = np.zeros((s, s))

        _error_msg = []

        if len(a) != s:
            _error_msg.append("The a-matrix needs one row per stage")

        for i, row in enumerate(a[:s]):
            if len(row) > s:
                _error_msg.append("Row {} of the a-matrix is longer than the number of stages".format(i))
                continue
            a_mat[i, :len(row)] = row

        if len(b) != s or len(e) != s:
            _error_msg.append("The b and e vectors need one entry per stage")

        # for an explicit method, a must be strictly lower triangular
        if not np.allclose(a_mat, np.tril(a_mat, k=-1)):
            _error_msg.append("The a-matrix has to be strictly lower triangular for "
                              "an explicit Runge-Kutta method, i.e. a_ij = 0 for i <= j")

        if _error_msg:
            raise ValueError("An error occurred while validating the input "
                             "Butcher tableau. More information: "
                             "{}.".format(", ".join(_error_msg)))

        for arr in (c, a_mat, b, e):
            arr.setflags(write=False)

        return cls(c=c, a=a_mat, b=b, e=e)

    @classmethod
    def from_embedded_pair(cls, c, a, b, b_hat) -> "ButcherTableau":
        """
        Build a tableau from the weights of both solutions of an embedded pair.
        """
        e = np.asarray(b, dtype=float) - np.asarray(b_hat, dtype=float)
        return cls.create(c=c, a=a, b=b, e=e)
