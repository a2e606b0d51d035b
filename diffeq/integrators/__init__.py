from diffeq.integrators.integrator import Integrator
from diffeq.integrators.functional import integrate, dormand_prince
