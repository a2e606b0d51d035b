from diffeq.errors import StepTooSmallError
from diffeq.integrators import Integrator, integrate, dormand_prince
from diffeq.models import ODEModel
from diffeq.stepfunctions import DormandPrince45, BogackiShampine32
from diffeq.stepsize_control import EmbeddedErrorController
from diffeq.types import Tolerance
from diffeq.version import PACKAGE_VERSION as __version__
