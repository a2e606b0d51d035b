from diffeq.stepsize_control.stepsizecontroller import StepSizeController, EmbeddedErrorController
from diffeq.stepsize_control.initial_step import select_initial_step
