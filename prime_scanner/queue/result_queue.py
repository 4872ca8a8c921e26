"""
Result Queue Modülü

Bu modül, scan worker'ların bulduğu asalların toplandığı kuyruğu yönetir.
Çok üretici / tek tüketici: N worker yazar, sadece ResultAggregator okur.
Process modunda multiprocessing.Queue, thread modunda queue.Queue kullanır.

Kullanım:
    sink = ResultQueue(WorkerMode.THREAD)
    sink.put(97)
    item = sink.get(timeout=1.0)
"""

import multiprocessing
import queue
from typing import Any, Optional
from threading import Lock
from datetime import datetime

from ..core.enums import WorkerMode
from ..status import ComponentStatus


class ResultQueue:
    """
    Result Queue - Sonuç kuyruğu

    Worker'lar asalları ve tamamlanma işaretlerini buraya ekler,
    ResultAggregator buradan alır.

    Özellikler:
    - Sınırsız kuyruk: put() tüketiciyi beklemez, doğruluk buffer boyutuna bağlı değil
    - Blocking get: Timeout ile öğe alır
    - Status takibi: Alınan öğe sayısı, eklenen sayısı sadece thread modunda
    """

    def __init__(self, mode: WorkerMode = WorkerMode.PROCESS):
        self._mode = mode
        if mode == WorkerMode.PROCESS:
            self._queue = multiprocessing.Queue()
        else:
            self._queue = queue.Queue()
        self._total_put = 0
        self._total_get = 0
        self._lock = Lock()
        self._created_at = datetime.now()

    @property
    def mode(self) -> WorkerMode:
        return self._mode

    def put(self, item: Any):
        """Öğe ekle (sınırsız kuyruk, bloklamaz)"""
        self._queue.put(item)
        # Process modunda bu sayaç worker process'inde artar, status'ta raporlanmaz
        with self._lock:
            self._total_put += 1

    def get(self, timeout: Optional[float] = None) -> Optional[Any]:
        """
        Öğe alır

        Args:
            timeout: Maksimum bekleme süresi (saniye). None = non-blocking

        Returns:
            Öğe veya None (timeout/boş)
        """
        try:
            if timeout is None:
                item = self._queue.get_nowait()
            else:
                item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

        with self._lock:
            self._total_get += 1
        return item

    def size(self) -> int:
        """Queue boyutu (yaklaşık)"""
        try:
            return self._queue.qsize()
        except NotImplementedError:
            return 0  # macOS'ta multiprocessing.Queue.qsize desteklenmiyor

    def close(self):
        """Process modunda queue'nun feeder thread'ini kapat"""
        if self._mode == WorkerMode.PROCESS:
            self._queue.close()
            self._queue.join_thread()

    def get_status(self) -> ComponentStatus:
        """Component durumu"""
        with self._lock:
            metrics = {
                "mode": self._mode.value,
                "size": self.size(),
                "total_get": self._total_get,
            }
            if self._mode == WorkerMode.THREAD:
                metrics["total_put"] = self._total_put

        return ComponentStatus(
            name="result_queue",
            health="healthy",
            metrics=metrics
        )

    def __getstate__(self):
        """Pickle için state - lock'ları hariç tut"""
        return {
            '_mode': self._mode,
            '_queue': self._queue,
            '_total_put': self._total_put,
            '_total_get': self._total_get,
            '_created_at': self._created_at,
        }

    def __setstate__(self, state):
        """Pickle'dan restore et"""
        self._mode = state['_mode']
        self._queue = state['_queue']
        self._total_put = state['_total_put']
        self._total_get = state['_total_get']
        self._created_at = state['_created_at']
        self._lock = Lock()  # Yeni lock oluştur
