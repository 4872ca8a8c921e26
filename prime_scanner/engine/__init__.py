from .engine import ScanEngine
from .aggregator import ResultAggregator

__all__ = ['ScanEngine', 'ResultAggregator']
