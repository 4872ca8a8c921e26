from .result_queue import ResultQueue

__all__ = ['ResultQueue']
