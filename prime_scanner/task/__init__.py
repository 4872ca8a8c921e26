from .partition import Partition, partition, covered_range, MAX_SCAN_VALUE
from .report import ScanReport

__all__ = ['Partition', 'partition', 'covered_range', 'MAX_SCAN_VALUE', 'ScanReport']
