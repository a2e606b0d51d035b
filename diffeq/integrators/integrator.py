import datetime
import logging
import os
import uuid
from typing import Dict, Text, List, Any, Tuple

import absl.logging
import numpy as np
import pandas as pd
from tabulate import tabulate

from diffeq.callbacks import Callback
from diffeq.constants import ResultKeys, ConfigKeys, ModelMetadataKeys
from diffeq.errors import StepTooSmallError
from diffeq.integrators.integrator_loops import adaptive_h_loop
from diffeq.metrics import Metric
from diffeq.models import BaseModel
from diffeq.stepfunctions import StepFunction
from diffeq.stepsize_control import StepSizeController
from diffeq.types import State
from diffeq.utils.data_utils import result_to_frame, metrics_to_frame, trajectory_to_arrays
from diffeq.utils.result_utils import get_result_metadata, write_result_to_disk

logger = logging.getLogger(__name__)

# handlers sit on the package logger, so step rejections logged by the
# integration loops reach them as well
package_logger = logging.getLogger("diffeq")
package_logger.setLevel(logging.INFO)

ch = logging.StreamHandler()
ch.setLevel(logging.INFO)
ch.setFormatter(absl.logging.PythonFormatter())
package_logger.addHandler(ch)


class Integrator:
    """
    Adaptive ODE integrator. An integrator keeps minimal state to facilitate IO and
    logging of model integration results. It also serves as a registry for all model results and can be
    queried for specific results by their ID.
    """

    def __init__(self,
                 base_log_dir: Text = None,
                 logfile_name: Text = None,
                 base_output_dir: Text = None):
        """
        Integrator constructor.

        Args:
            base_log_dir: Base directory for saving ODE integration logs.
            logfile_name: Base log file name to save all logs into.
            base_output_dir: Base output directory for saving result and model data.
        """
        # empty list holding the different executed ODE integration results
        self.results = []

        self.base_log_dir = base_log_dir or os.path.join(os.getcwd(), "logs")

        self.logfile_name = logfile_name or "logs.txt"

        self._set_up_logger(log_dir=self.base_log_dir, logfile_name=self.logfile_name)

        self.base_output_dir = base_output_dir or os.path.join(os.getcwd(), "results")

        logger.info("Created an Integrator instance.")

    def _reset(self):
        # Hard reset all data
        self.results = []

    def _set_up_logger(self, log_dir: Text, logfile_name: Text):
        os.makedirs(log_dir, exist_ok=True)

        self._flush_stale_file_handlers()

        fh = logging.FileHandler(os.path.join(log_dir, logfile_name))
        fh.setLevel(logging.INFO)
        fh.setFormatter(absl.logging.PythonFormatter())
        package_logger.addHandler(fh)

    @staticmethod
    def _flush_stale_file_handlers():
        for handler in list(package_logger.handlers):
            if isinstance(handler, logging.FileHandler):
                package_logger.removeHandler(handler)
                handler.close()

    @staticmethod
    def _make_config(model: BaseModel,
                     step_func: StepFunction,
                     sc: StepSizeController,
                     initial_state: State,
                     end: float,
                     h: float,
                     callbacks: List[Callback],
                     metrics: List[Metric]) -> Dict[Text, Any]:

        start, _ = initial_state

        config = {ConfigKeys.TIMESTAMP: datetime.datetime.now().strftime("%c"),
                  ConfigKeys.ID: str(uuid.uuid4()),
                  ConfigKeys.METHOD: step_func.__class__.__name__,
                  ConfigKeys.START: float(start),
                  ConfigKeys.END: float(end),
                  ConfigKeys.INITIAL_STEP_SIZE: h,
                  ConfigKeys.ATOL: getattr(sc, "atol", None),
                  ConfigKeys.RTOL: getattr(sc, "rtol", None),
                  ConfigKeys.METRICS: [m.__name__ for m in metrics],
                  ConfigKeys.CALLBACKS: [c.__name__ for c in callbacks]
                  }

        config.update(model.get_metadata())

        return config

    def integrate_adaptively(self,
                             model: BaseModel,
                             step_func: StepFunction,
                             initial_state: State,
                             sc: StepSizeController,
                             end: float,
                             initial_h: float = None,
                             reset: bool = False,
                             verbosity: int = logging.INFO,
                             output_dir: Text = None,
                             logfile: Text = None,
                             progress_bar: bool = False,
                             callbacks: List[Callback] = None,
                             metrics: List[Metric] = None):
        """
        Integrate a model with a chosen step function adaptively with custom step size control.

        Args:
            model: ODEModel instance of your ODE problem.
            step_func: Adaptive step function used to integrate the model.
            initial_state: State tuple (x0, y0) containing the initial state variables.
            sc: Step size controller, adjusting the step size throughout the integration.
            end: Target end of the integration interval. Equals the x value of the last step.
            initial_h: Initial step size for integration. Estimated from the model if not given.
            reset: Bool, whether to reset the integrator (this deletes all previous results).
            verbosity: Logging verbosity, default logging.INFO. At logging.DEBUG, the initial step
             size and every rejected step are logged as well.
            output_dir: Output directory. If specified, saves result data and info into this directory.
            logfile: Log file. If specified, writes all logs of the integration into this file.
            progress_bar: Bool, whether to display a progress bar during the integration.
            callbacks: List of callbacks to execute after each accepted step.
            metrics: List of metrics to calculate after each accepted step.

        Raises:
            StepTooSmallError: If the integration fails. No result is registered in that case.
        """
        # empty lists in case nothing was supplied
        callbacks = callbacks or []
        metrics = metrics or []

        if reset:
            self._reset()

        if logfile:
            self._set_up_logger(log_dir=self.base_log_dir, logfile_name=logfile)

        package_logger.setLevel(verbosity)
        for handler in package_logger.handlers:
            handler.setLevel(verbosity)

        initial_state = model.make_state(*initial_state)

        config = self._make_config(model=model,
                                   step_func=step_func,
                                   sc=sc,
                                   initial_state=initial_state,
                                   end=end,
                                   h=initial_h,
                                   callbacks=callbacks,
                                   metrics=metrics)

        logger.info("Starting integration.")

        try:
            result = adaptive_h_loop(step_func=step_func,
                                     model=model,
                                     sc=sc,
                                     initial_state=initial_state,
                                     end=end,
                                     h=initial_h,
                                     callbacks=callbacks,
                                     metrics=metrics,
                                     progress_bar=progress_bar)
        except StepTooSmallError as e:
            logger.error("Integration failed after {} accepted steps: {}".format(len(e.xs) - 1, e))
            raise

        config[ConfigKeys.NUM_STEPS] = len(result) - 1

        logger.info("Finished integration in {} steps.".format(config[ConfigKeys.NUM_STEPS]))

        result_dict = {ResultKeys.RESULT_DATA: result,
                       ResultKeys.CONFIG: config}

        self.results.append(result_dict)

        if output_dir:
            self.save_result(result=result_dict, output_dir=output_dir)

            logger.info("Results saved to directory {}.".format(
                os.path.join(self.base_output_dir, output_dir)))

        return self

    def list_results(self, tablefmt: Text = "github"):
        """
        Lists metadata of all available previous results.

        Args:
            tablefmt: Table format, passed to tabulate.
        """

        if len(self.results) == 0:
            print("No results available!")
            return

        metadata_list = [get_result_metadata(result) for result in self.results]

        print(tabulate(metadata_list, headers="keys", tablefmt=tablefmt))

    def get_result_by_id(self, result_id: Text) -> Dict[Text, Any]:
        """
        Returns a previous ODE integration result by (partial) ID.

        Args:
            result_id: ID of the chosen integration result object, or "latest".

        Raises:
            ValueError: If no result matches the given result ID.

        """
        if len(self.results) == 0:
            raise ValueError("No results available. Please integrate a model first!")
        if result_id == "latest":
            return self.results[-1]
        try:
            result = next(r for r in self.results if result_id in str(r[ResultKeys.CONFIG][ConfigKeys.ID]))
        except StopIteration:
            raise ValueError(f"Result with ID {result_id} not found.")

        return result

    def return_trajectory(self, result_id: Text) -> Tuple[np.ndarray, np.ndarray]:
        """
        Return the trajectory of a previous integration result as arrays.

        Args:
            result_id: ID of the chosen integration result object.

        Returns:
            A tuple (xs, ys) of positions and the corresponding state vectors.
        """
        result = self.get_result_by_id(result_id=result_id)
        return trajectory_to_arrays(result[ResultKeys.RESULT_DATA])

    def return_result_data(self, result_id: Text) -> pd.DataFrame:
        """
        Return data of a previous integration result.

        Args:
            result_id: ID of the chosen integration result object.

        Returns:
            A pd.DataFrame containing the ODE integration data for each step.
        """
        result = self.get_result_by_id(result_id=result_id)
        dim_names = result[ResultKeys.CONFIG].get(ModelMetadataKeys.DIM_NAMES)

        return result_to_frame(result[ResultKeys.RESULT_DATA], dim_names=dim_names)

    def return_metrics(self, result_id: Text) -> pd.DataFrame:
        """
        Return metrics data of a previous integration result.

        Args:
            result_id: ID of the chosen integration result object.

        Returns:
            A pd.DataFrame of the metric data for each accepted step of the result with ID result_id.
        """
        result = self.get_result_by_id(result_id=result_id)

        return metrics_to_frame(result[ResultKeys.RESULT_DATA])

    def save_result(self, result: Dict[Text, Any], output_dir: Text):
        """
        Saves a result object to an output directory on disk.

        Args:
            result: result object obtained as output from ODE integration.
            output_dir: Target directory to save the result to, relative to the base output directory.

        """
        out_dir = os.path.join(self.base_output_dir, output_dir)
        write_result_to_disk(result=result, out_dir=out_dir)
