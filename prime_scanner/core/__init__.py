"""Core modül - temel sınıflar"""

from .enums import WorkerMode, RunState
from .exceptions import (
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

__all__ = [
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
