class ResultKeys:
    RESULT_DATA = "result_data"
    METRICS = "metrics"
    CONFIG = "config"


class ConfigKeys:
    START = "start"
    END = "end"
    INITIAL_STEP_SIZE = "initial_h"
    ATOL = "atol"
    RTOL = "rtol"
    METHOD = "method"
    NUM_STEPS = "num_steps"
    METRICS = "metrics"
    CALLBACKS = "callbacks"
    TIMESTAMP = "timestamp"
    ID = "result_id"


class ModelMetadataKeys:
    DIM_NAMES = "dim_names"
