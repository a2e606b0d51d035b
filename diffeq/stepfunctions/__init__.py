from diffeq.stepfunctions.stepfunctions import (
    DormandPrince45,
    BogackiShampine32
)

from diffeq.stepfunctions.templates import (
    SingleStepMethod,
    EmbeddedRungeKuttaMethod
)

from diffeq.stepfunctions.tableau import ButcherTableau

StepFunction = SingleStepMethod
