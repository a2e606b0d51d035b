MISSING_INFO = "Missing model information. Supply a right hand side f(x, y) " \
               "either by specifying a module path or a callable function."

BAD_MODEL_DEF = "Defining a model function by a module path and by a callable function " \
                "object are mutually exclusive options. Please choose only one of these options."

DIMENSION_MISMATCH = "Error: Dimension mismatch. The model returned a derivative of size {0} " \
                     "for a state of size {1}."
