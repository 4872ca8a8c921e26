"""Prime Scanner - Kaldığı yerden devam eden paralel asal sayı tarayıcısı"""

from .engine import ScanEngine, ResultAggregator
from .config import ScannerConfig
from .oracle import is_probably_prime, DEFAULT_CONFIDENCE
from .task.partition import Partition, partition, MAX_SCAN_VALUE
from .task.report import ScanReport
from .store import CheckpointStore, CsvCheckpointStore, MemoryCheckpointStore, resolve_start
from .status import ComponentStatus
from .core.enums import WorkerMode, RunState
from .core.exceptions import (
    ScannerError,
    ConfigError,
    ScanRangeOverflow,
    CheckpointError,
    CheckpointCorrupt,
    CheckpointReadFailure,
    CheckpointWriteFailure,
    WorkerError,
    RunInterrupted
)

__version__ = "1.0.0"
__all__ = [
    'ScanEngine',
    'ResultAggregator',
    'ScannerConfig',
    'is_probably_prime',
    'DEFAULT_CONFIDENCE',
    'Partition',
    'partition',
    'MAX_SCAN_VALUE',
    'ScanReport',
    'CheckpointStore',
    'CsvCheckpointStore',
    'MemoryCheckpointStore',
    'resolve_start',
    'ComponentStatus',
    'WorkerMode',
    'RunState',
    'ScannerError',
    'ConfigError',
    'ScanRangeOverflow',
    'CheckpointError',
    'CheckpointCorrupt',
    'CheckpointReadFailure',
    'CheckpointWriteFailure',
    'WorkerError',
    'RunInterrupted',
]
