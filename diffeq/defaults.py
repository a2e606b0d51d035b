# default error tolerances for adaptive integration
ATOL = 1e-6
RTOL = 1e-3

# step size control factors
SAFETY_FACTOR = 0.9
FAC_MIN = 0.2
FAC_MAX = 10.0

# smallest allowed step, in units of floating point spacing at x
MIN_STEP_ULPS = 10

# step size control builtin metric names
step_size = "h"
error_norm = "error_norm"
rejected = "rejected"
