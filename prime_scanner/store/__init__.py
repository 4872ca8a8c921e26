from .checkpoint_store import CheckpointStore, CsvCheckpointStore, MemoryCheckpointStore
from .resolver import resolve_start, ORIGIN

__all__ = [
    'CheckpointStore',
    'CsvCheckpointStore',
    'MemoryCheckpointStore',
    'resolve_start',
    'ORIGIN',
]
