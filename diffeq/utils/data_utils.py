from typing import List, Text, Any, Dict, Tuple

import numpy as np
import pandas as pd

__all__ = ["initialize_dim_names", "trajectory_to_arrays", "result_to_frame", "metrics_to_frame"]


def initialize_dim_names(y: np.ndarray, var_name: Text = "y") -> List[Text]:
    """
    Initialize the dimension names for saving data to disk using pandas.
    The dimension names will be used as column headers in the resulting pd.DataFrame.

    Args:
        y: Sample state vector from which to infer the number of dimensions.
        var_name: Base name of the state variable.

    Returns:
        A list of dimension names.
    """
    dim = len(y)

    if dim == 1:
        return [var_name]

    return ["{0}_{1}".format(var_name, i) for i in range(1, dim + 1)]


def trajectory_to_arrays(result: List[Tuple[float, np.ndarray, Dict[Text, Any]]]):
    """
    Split a run result into parallel position and state arrays.

    Args:
        result: List of (x, y, metrics) tuples as produced by the integration loops.

    Returns:
        A tuple (xs, ys) with a 1-d array of positions and a 2-d array whose i-th row is the state
        at xs[i].
    """
    xs = np.array([x for x, _, _ in result], dtype=float)
    ys = np.stack([y for _, y, _ in result])

    return xs, ys


def result_to_frame(result: List[Tuple[float, np.ndarray, Dict[Text, Any]]],
                    dim_names: List[Text] = None,
                    indep_name: Text = "x") -> pd.DataFrame:
    """
    Convert the trajectory of a run result to a pd.DataFrame, one row per step.

    Args:
        result: List of (x, y, metrics) tuples as produced by the integration loops.
        dim_names: Column names for the state dimensions. Inferred if not given.
        indep_name: Column name of the independent variable.

    Returns:
        A pd.DataFrame with the independent variable as first column.
    """
    xs, ys = trajectory_to_arrays(result)

    dim_names = dim_names or initialize_dim_names(ys[0])

    if len(dim_names) != ys.shape[1]:
        raise ValueError("Got {0} dimension names for a system of size {1}.".format(
            len(dim_names), ys.shape[1]))

    df = pd.DataFrame(data=ys, columns=dim_names)
    df.insert(0, indep_name, xs)

    return df


def metrics_to_frame(result: List[Tuple[float, np.ndarray, Dict[Text, Any]]],
                     indep_name: Text = "x") -> pd.DataFrame:
    """
    Convert the per-step metrics of a run result to a pd.DataFrame.

    Args:
        result: List of (x, y, metrics) tuples as produced by the integration loops.
        indep_name: Column name of the independent variable.

    Returns:
        A pd.DataFrame with one row per accepted step, the initial state excluded.
    """
    # the initial state carries no step metrics
    records = [{indep_name: x, **m} for x, _, m in result[1:]]

    return pd.DataFrame.from_records(records)
