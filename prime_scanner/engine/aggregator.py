"""
Result Aggregator

Sonuç kuyruğunun tek tüketicisi. Tüm worker'lar WorkerDone işareti bırakana
kadar kuyruğu boşaltır, asalları sıralar ve store'a tek seferde yazar.

Kullanım:
    aggregator = ResultAggregator(sink, expected_workers=9, pool=pool)
    primes = aggregator.collect()
    aggregator.persist(store, primes, start)
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..core.exceptions import RunInterrupted, WorkerError
from ..store.checkpoint_store import CheckpointStore
from ..worker.scan_worker import WorkerDone


class ResultAggregator:
    """
    Result Aggregator - tek tüketici

    Bu sınıf kendisiyle eşzamanlı çalışmaz; biriktirme adımı kilitsizdir.

    Özellikler:
    - Bariyer: Beklenen sayıda WorkerDone gelmeden kuyruk bitmiş sayılmaz
    - Ölü worker tespiti: Tüm worker'lar işaret bırakmadan çıktıysa hata
    - Doğrulama: Sıralı liste kesin artan ve başlangıç değerinden büyük-eşit
    """

    def __init__(
        self,
        sink: Any,  # ResultQueue
        expected_workers: int,
        pool: Any = None,  # ScanPool (alive_count, get_status)
        poll_timeout: float = 1.0,
        stop_event: Optional[Any] = None
    ):
        if expected_workers < 1:
            raise WorkerError("expected_workers en az 1 olmalı", code="WRK001")

        self._sink = sink
        self._expected = expected_workers
        self._pool = pool
        self._poll_timeout = poll_timeout
        self._stop_event = stop_event
        self._done: Dict[int, WorkerDone] = {}
        self._logger = logging.getLogger("aggregator")

    @property
    def completed_workers(self) -> int:
        return len(self._done)

    def collect(self) -> List[int]:
        """
        Tüm asalları toplar ve sıralı döndürür

        Returns:
            List[int]: Artan sırada asallar

        Raises:
            WorkerError: Bir worker hata bildirdiyse, işaretsiz çıktıysa
                veya aynı değer iki kez geldiyse
            RunInterrupted: stop_event set edildiyse
        """
        primes: List[int] = []

        while len(self._done) < self._expected:
            self._raise_if_stopped()

            item = self._sink.get(timeout=self._poll_timeout)

            if item is None:
                self._on_idle(primes)
                continue

            self._accept(item, primes)

        # Bariyer geçildi, tamponda kalanları al
        while True:
            item = self._sink.get()
            if item is None:
                break
            self._accept(item, primes)

        primes.sort()
        self._verify_strictly_increasing(primes)

        self._logger.info(f"{self._expected} worker tamamlandı, {len(primes)} asal toplandı")
        return primes

    def _accept(self, item: Any, primes: List[int]):
        """Kuyruktan gelen tek öğeyi işler"""
        if WorkerDone.is_marker(item):
            done = WorkerDone.from_dict(item)
            if not done.is_success:
                self._raise_if_stopped()
                raise WorkerError(
                    f"Worker hata bildirdi: {done.error}",
                    code="WRK003",
                    worker_id=done.worker_id
                )
            if done.partition_index in self._done:
                raise WorkerError(
                    f"Partition {done.partition_index} için ikinci işaret",
                    code="WRK004",
                    worker_id=done.worker_id
                )
            self._done[done.partition_index] = done
            self._logger.debug(
                f"{done.worker_id} tamamlandı ({len(self._done)}/{self._expected}), "
                f"{done.primes_found} asal"
            )
        else:
            primes.append(item)

    def _on_idle(self, primes: List[int]):
        """Poll timeout: ilerlemeyi logla, ölü worker kontrolü yap"""
        if self._pool is None:
            return

        self._logger.debug(
            f"İlerleme: {len(self._done)}/{self._expected} worker, {len(primes)} asal | "
            f"{self._pool.get_status().metrics.get('alive_workers')} canlı"
        )

        if self._pool.alive_count() > 0:
            return

        # Worker'lar bitti, pipe'ta kalanları son kez al
        while len(self._done) < self._expected:
            item = self._sink.get(timeout=self._poll_timeout)
            if item is None:
                break
            self._accept(item, primes)

        if len(self._done) < self._expected:
            self._raise_if_stopped()
            missing = self._expected - len(self._done)
            raise WorkerError(
                f"{missing} worker tamamlanma işareti bırakmadan çıktı",
                code="WRK005"
            )

    def _raise_if_stopped(self):
        if self._stop_event is not None and self._stop_event.is_set():
            raise RunInterrupted("Toplama sırasında durduruldu")

    @staticmethod
    def _verify_strictly_increasing(primes: Sequence[int]):
        for previous, current in zip(primes, primes[1:]):
            if current <= previous:
                raise WorkerError(
                    f"Aynı değer birden fazla kez üretildi: {current}",
                    code="WRK006"
                )

    def persist(self, store: CheckpointStore, primes: Sequence[int], start: int) -> int:
        """
        Sıralı asalları store'a tek seferde ekler

        Args:
            store: Checkpoint store
            primes: Artan sırada asallar
            start: Run'ın başlangıç değeri (son checkpoint + 1)

        Returns:
            int: Yazılan asal sayısı

        Raises:
            WorkerError: Bir değer start'tan küçükse
            CheckpointWriteFailure: Store yazamazsa
        """
        if not primes:
            self._logger.info("Yeni asal yok, store değişmedi")
            return 0

        if primes[0] < start:
            raise WorkerError(
                f"{primes[0]} değeri checkpoint'in gerisinde (start={start})",
                code="WRK007"
            )

        store.append_all(primes)
        return len(primes)
