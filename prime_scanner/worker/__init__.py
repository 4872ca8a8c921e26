from .scan_worker import ScanWorker, WorkerDone, scan_partition
from .pool import ScanPool

__all__ = ['ScanWorker', 'WorkerDone', 'scan_partition', 'ScanPool']
