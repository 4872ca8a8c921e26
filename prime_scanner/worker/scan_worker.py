"""
Scan Worker Modülü

Bu modül, tek bir partition'ı tarayan worker'ı içerir.
Worker her adayı oracle'a sorar, asal olanları sink'e gönderir ve
sonunda her durumda bir WorkerDone işareti bırakır.

Kullanım:
    worker = ScanWorker("scan-0", partition, sink, confidence=20)
    worker.run()
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..core.exceptions import RunInterrupted
from ..oracle.primality import is_probably_prime
from ..task.partition import Partition


@dataclass
class WorkerDone:
    """
    Tamamlanma işareti

    Worker'ın son mesajıdır. error doluysa tarama yarıda kalmıştır.
    """
    worker_id: str
    partition_index: int
    primes_found: int = 0
    error: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        """Dict'e dönüştür (queue için)"""
        return {
            "kind": "done",
            "worker_id": self.worker_id,
            "partition_index": self.partition_index,
            "primes_found": self.primes_found,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WorkerDone":
        """Dict'ten oluştur"""
        return cls(
            worker_id=data.get("worker_id", "unknown"),
            partition_index=data.get("partition_index", -1),
            primes_found=data.get("primes_found", 0),
            error=data.get("error"),
        )

    @staticmethod
    def is_marker(item: Any) -> bool:
        return isinstance(item, dict) and item.get("kind") == "done"


def scan_partition(
    partition: Partition,
    sink: Any,
    confidence: int,
    stop_event: Optional[Any] = None
) -> int:
    """
    Partition'ı tarar, asalları sink'e gönderir

    2 oracle'a sorulmadan gönderilir, diğer adaylar sadece tek sayılardır.

    Args:
        partition: Taranacak aralık
        sink: put(int) metodu olan herhangi bir nesne
        confidence: Miller-Rabin tur sayısı
        stop_event: set edildiğinde tarama yarıda kesilir (thread modu)

    Returns:
        int: Gönderilen asal sayısı

    Raises:
        RunInterrupted: stop_event set edildiyse
    """
    found = 0
    for candidate in partition.scan_candidates():
        if stop_event is not None and stop_event.is_set():
            raise RunInterrupted(f"Tarama durduruldu: {partition}")
        if candidate == 2 or is_probably_prime(candidate, confidence):
            sink.put(candidate)
            found += 1
    return found


class ScanWorker:
    """
    Scan Worker - tek partition

    Bir partition'a sahiptir, run() boyunca sadece o aralığı tarar.
    Hata olsa bile WorkerDone işareti gönderilir ki aggregator beklemede kalmasın.
    """

    def __init__(
        self,
        worker_id: str,
        partition: Partition,
        sink: Any,
        confidence: int,
        stop_event: Optional[Any] = None
    ):
        self._worker_id = worker_id
        self._partition = partition
        self._sink = sink
        self._confidence = confidence
        self._stop_event = stop_event

    @property
    def worker_id(self) -> str:
        return self._worker_id

    @property
    def partition(self) -> Partition:
        return self._partition

    def run(self) -> WorkerDone:
        """Partition'ı tara ve tamamlanma işaretini gönder"""
        logger = logging.getLogger("scan_worker")
        logger.debug(f"{self._worker_id} başladı: {self._partition}")

        done = WorkerDone(worker_id=self._worker_id, partition_index=self._partition.index)
        try:
            done.primes_found = scan_partition(
                self._partition, self._sink, self._confidence, self._stop_event
            )
        except Exception as e:
            done.error = f"{type(e).__name__}: {e}"
            logger.error(f"{self._worker_id} tarama hatası: {done.error}")
        finally:
            self._sink.put(done.to_dict())

        logger.debug(f"{self._worker_id} bitti: {done.primes_found} asal")
        return done
