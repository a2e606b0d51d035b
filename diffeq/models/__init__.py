from diffeq.models.base_model import BaseModel
from diffeq.models.model import ODEModel, ODEFunction
