"""
Scan Pool Modülü

Bu modül, her partition için bir scan worker açar ve yönetir.
Worker sayısı run boyunca sabittir: partition başına bir process veya thread.

Kullanım:
    pool = ScanPool(partitions, sink, confidence=20, mode=WorkerMode.PROCESS)
    pool.start()
    pool.join()
"""

import logging
import multiprocessing
import os
import signal
import threading
import time
from typing import Any, List, Optional, Sequence

import psutil

from ..core.enums import WorkerMode
from ..core.exceptions import WorkerError
from ..status import ComponentStatus
from ..task.partition import Partition
from .scan_worker import ScanWorker


class ScanPool:
    """
    Scan Pool - Worker yönetimi

    Partition'ları worker'lara birebir atar ve hepsini aynı anda başlatır.

    Özellikler:
    - PROCESS modu: Gerçek paralellik (GIL yok), opsiyonel CPU sabitleme
    - THREAD modu: Hafif, testler için
    - Status takibi: Canlı worker sayısı, process başına CPU/RSS (psutil)
    """

    def __init__(
        self,
        partitions: Sequence[Partition],
        sink: Any,  # ResultQueue
        confidence: int,
        mode: WorkerMode = WorkerMode.PROCESS,
        pin_cpus: bool = False
    ):
        if not partitions:
            raise WorkerError("Partition olmadan pool başlatılamaz", code="WRK001")

        self._partitions = list(partitions)
        self._sink = sink
        self._confidence = confidence
        self._mode = mode
        self._pin_cpus = pin_cpus

        self._units: List[Any] = []  # Process veya Thread
        self._started = False
        self._lock = threading.Lock()
        self._stop_event = threading.Event()  # Thread modunda durdurma sinyali
        self._logger = logging.getLogger("scan_pool")

    @property
    def size(self) -> int:
        return len(self._partitions)

    def start(self):
        """Tüm worker'ları başlat"""
        with self._lock:
            if self._started:
                raise WorkerError("Pool zaten başlatılmış", code="WRK002")

            # CPU affinity için mevcut çekirdekleri al
            available_cpus = list(range(psutil.cpu_count(logical=True) or 1))

            for partition in self._partitions:
                worker_id = f"scan-{partition.index}"

                if self._mode == WorkerMode.PROCESS:
                    # Worker'a CPU ata (Round-robin)
                    cpu_id = None
                    if self._pin_cpus:
                        cpu_id = available_cpus[partition.index % len(available_cpus)]

                    unit = multiprocessing.Process(
                        target=self._run_process,
                        args=(worker_id, partition.to_dict(), self._sink, self._confidence, cpu_id),
                        name=worker_id,
                        daemon=True
                    )
                else:
                    worker = ScanWorker(
                        worker_id, partition, self._sink, self._confidence, self._stop_event
                    )
                    unit = threading.Thread(target=worker.run, name=worker_id, daemon=True)

                unit.start()
                self._units.append(unit)

            self._started = True
            self._logger.info(f"{len(self._units)} scan worker başlatıldı ({self._mode.value})")

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Worker'ların bitmesini bekler

        Args:
            timeout: Toplam maksimum bekleme süresi (saniye). None = süresiz

        Returns:
            bool: True ise hepsi bitti
        """
        deadline = None if timeout is None else time.time() + timeout
        for unit in self._units:
            remaining = None
            if deadline is not None:
                remaining = max(0.0, deadline - time.time())
            unit.join(timeout=remaining)
        return self.alive_count() == 0

    def alive_count(self) -> int:
        """Hala çalışan worker sayısı"""
        return sum(1 for unit in self._units if unit.is_alive())

    def terminate(self):
        """
        Çalışan worker'ları durdurur

        Process modunda process'ler sonlandırılır, thread modunda
        stop event set edilir ve thread'ler bir sonraki adayda çıkar.
        """
        self._stop_event.set()
        if self._mode != WorkerMode.PROCESS:
            return

        for unit in self._units:
            if unit.is_alive():
                unit.terminate()
                unit.join(timeout=2.0)
                if unit.is_alive():
                    unit.kill()
                    unit.join(timeout=1.0)

    def get_status(self) -> ComponentStatus:
        """Pool durumu"""
        worker_metrics = {}
        for partition, unit in zip(self._partitions, self._units):
            metrics = {
                "partition": str(partition),
                "alive": unit.is_alive(),
            }
            if self._mode == WorkerMode.PROCESS and unit.is_alive():
                try:
                    proc = psutil.Process(unit.pid)
                    metrics["cpu_percent"] = proc.cpu_percent(None)
                    metrics["rss_mb"] = proc.memory_info().rss / (1024 * 1024)
                except (psutil.NoSuchProcess, psutil.AccessDenied):
                    pass  # Worker arada bitti
            worker_metrics[unit.name] = metrics

        alive = self.alive_count()
        metrics = {
            "mode": self._mode.value,
            "total_workers": len(self._units),
            "alive_workers": alive,
            "workers": worker_metrics,
        }

        return ComponentStatus(
            name="scan_pool",
            health="healthy" if self._started else "unhealthy",
            metrics=metrics
        )

    @staticmethod
    def _run_process(worker_id, partition_dict, sink, confidence, cpu_id):
        """Process içinde çalışan fonksiyon"""
        _reset_child_signals()

        # CPU Affinity Ayarla (Çekirdek Sabitleme)
        if cpu_id is not None and hasattr(os, 'sched_setaffinity'):
            try:
                os.sched_setaffinity(0, {cpu_id})
            except OSError as e:
                logging.getLogger("scan_pool").debug(f"{worker_id} CPU sabitlenemedi: {e}")

        partition = Partition.from_dict(partition_dict)
        ScanWorker(worker_id, partition, sink, confidence).run()


def _reset_child_signals():
    """
    Worker process'inde ana process'ten gelen signal handler'larını sıfırlar

    Ctrl+C'yi sadece ana process işler ve worker'ları kendisi sonlandırır;
    SIGTERM ise worker'ı varsayılan davranışla bitirir.
    """
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    signal.signal(signal.SIGTERM, signal.SIG_DFL)
