from diffeq.callbacks.callback import Callback
