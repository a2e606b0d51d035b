from typing import Dict, Text, Any

from diffeq.models import BaseModel
from diffeq.types import State


class Callback:
    """
    Base callback interface. Callbacks are executed after every accepted step of an
    integration run, e.g. for monitoring or recording custom quantities.
    """
    def __init__(self, name: Text = None):
        """
        Base callback constructor.

        Args:
            name: Optional string identifier.
        """
        self.__name__ = name or self.__class__.__name__

    def __call__(self,
                 i: int,
                 state: State,
                 new_state: State,
                 model: BaseModel,
                 local_vars: Dict[Text, Any]) -> None:
        """
        Callback class call operator. Overload this with your custom logic to use in
        ODE integration runs.

        Args:
            i: Current step number.
            state: Previous ODE state.
            new_state: New ODE state calculated by the used step function.
            model: ODE model that is used in the integration run.
            local_vars: Handle for the locals() dict passed to the Callbacks.
        """
        raise NotImplementedError
