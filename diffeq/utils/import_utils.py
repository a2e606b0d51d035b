import importlib
from typing import Text, Callable

__all__ = ["import_func_from_module"]


def import_func_from_module(module_path: Text, fn_name: Text) -> Callable:
    """
    Imports a function by name from a module given by its import path.

    Raises:
        ImportError: If the module does not define a function called fn_name.
    """
    user_module = importlib.import_module(module_path)

    try:
        return getattr(user_module, fn_name)
    except AttributeError:
        raise ImportError("{} not found in module {}.".format(fn_name, module_path))
