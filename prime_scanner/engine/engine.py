"""
Ana Engine Sınıfı

Bu modül, prime scanner'ın merkezi kontrol noktasıdır.
Checkpoint çözümleme, partition, paralel tarama, toplama ve kalıcı yazma
buradan yönetilir.

Kullanım:
    engine = ScanEngine(config)
    report = engine.run()
    print(report.summary())
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from ..config import ScannerConfig
from ..core.enums import RunState
from ..core.exceptions import RunInterrupted, ScannerError
from ..queue.result_queue import ResultQueue
from ..status import ComponentStatus
from ..store.checkpoint_store import CheckpointStore, CsvCheckpointStore
from ..store.resolver import resolve_start
from ..task.partition import partition, covered_range
from ..task.report import ScanReport
from ..worker.pool import ScanPool
from .aggregator import ResultAggregator


class ScanEngine:
    """
    Ana Engine - Bir run'ın tamamını yönetir

    Bu sınıf bir run'ı şu sırayla yürütür:
    IDLE → RESOLVED → PARTITIONED → SCANNING → AGGREGATING → PERSISTED → DONE

    Özellikler:
    - Store enjeksiyonu: Testler MemoryCheckpointStore verebilir
    - Tek okuma / tek yazma: Store tarama başlamadan bir kez okunur,
      tüm worker'lar bittikten sonra bir kez yazılır
    - Güvenli durdurma: request_stop() sonrası store'a hiçbir şey yazılmaz
    """

    def __init__(self, config: Optional[ScannerConfig] = None, store: Optional[CheckpointStore] = None):
        """
        Engine'i oluşturur

        Args:
            config: Tarayıcı yapılandırması (opsiyonel, varsayılan kullanılır)
            store: Checkpoint store (opsiyonel, config.checkpoint_path dosyası)
        """
        self._config = config or ScannerConfig()
        self._store = store or CsvCheckpointStore(self._config.checkpoint_path)

        # Logger: Sistem mesajları için
        logging.basicConfig(level=getattr(logging, self._config.log_level))
        self._logger = logging.getLogger("engine")

        self._state = RunState.IDLE
        self._lock = threading.Lock()
        self._stop_event = threading.Event()  # Durdurma sinyali

        # Run state: sadece bir run boyunca yaşar
        self._sink: Optional[ResultQueue] = None
        self._pool: Optional[ScanPool] = None
        self._last_report: Optional[ScanReport] = None

    @property
    def config(self) -> ScannerConfig:
        return self._config

    @property
    def store(self) -> CheckpointStore:
        return self._store

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def last_report(self) -> Optional[ScanReport]:
        return self._last_report

    def _set_state(self, state: RunState):
        self._logger.debug(f"Durum: {self._state.value} → {state.value}")
        self._state = state

    def run(self) -> ScanReport:
        """
        Bir run'ı baştan sona çalıştırır

        Returns:
            ScanReport: Run raporu

        Raises:
            CheckpointError: Store okunamaz/bozuk/yazılamazsa
            ConfigError: Aralık geçersiz veya sınırı aşıyorsa
            WorkerError: Bir worker başarısız olduysa
            RunInterrupted: request_stop() çağrıldıysa
        """
        with self._lock:
            if self._state not in (RunState.IDLE, RunState.DONE, RunState.FAILED):
                raise ScannerError("Engine zaten çalışıyor", code="ENG001")
            self._state = RunState.IDLE
            self._stop_event.clear()

        started_at = datetime.now(timezone.utc)
        config = self._config

        try:
            # 1. Devam noktası: store tek sefer okunur
            start = resolve_start(self._store)
            self._set_state(RunState.RESOLVED)

            # 2. Aralıkları worker'lara böl
            partitions = partition(start, config.batch_size, config.worker_count)
            lo, hi = covered_range(partitions)
            self._set_state(RunState.PARTITIONED)
            self._logger.info(
                f"Tarama aralığı [{lo}, {hi}), {len(partitions)} worker x {config.batch_size}"
            )

            self._check_stop()

            # 3. Worker'ları başlat, tek tüketici sonuçları toplar
            self._sink = ResultQueue(config.mode)
            self._pool = ScanPool(
                partitions,
                self._sink,
                confidence=config.confidence,
                mode=config.mode,
                pin_cpus=config.pin_cpus
            )
            aggregator = ResultAggregator(
                self._sink,
                expected_workers=len(partitions),
                pool=self._pool,
                poll_timeout=config.queue_poll_timeout,
                stop_event=self._stop_event
            )

            self._set_state(RunState.SCANNING)
            self._pool.start()
            primes = aggregator.collect()
            self._pool.join()

            # 4. Sıralı liste tek seferde yazılır
            self._set_state(RunState.AGGREGATING)
            self._check_stop()
            aggregator.persist(self._store, primes, start)
            self._set_state(RunState.PERSISTED)

            report = ScanReport(
                start=lo,
                end=hi,
                worker_count=len(partitions),
                batch_size=config.batch_size,
                primes_found=len(primes),
                first_prime=primes[0] if primes else None,
                last_prime=primes[-1] if primes else None,
                started_at=started_at,
            )
            self._last_report = report
            self._set_state(RunState.DONE)
            self._logger.info(report.summary())
            return report

        except BaseException as e:
            self._set_state(RunState.FAILED)
            self._logger.error(f"Run başarısız ({type(e).__name__}): {e}")
            raise

        finally:
            self._cleanup()

    def request_stop(self):
        """
        Run'ı durdurur (sinyal handler'dan çağrılabilir)

        Worker'lar sonlandırılır, run RunInterrupted ile biter ve
        store'a hiçbir şey yazılmaz.
        """
        self._stop_event.set()
        self._logger.warning("Durdurma isteği alındı, bu run'ın sonuçları yazılmayacak")
        pool = self._pool
        if pool is not None:
            pool.terminate()

    def _check_stop(self):
        if self._stop_event.is_set():
            raise RunInterrupted()

    def _cleanup(self):
        """Run state'ini temizle"""
        if self._pool is not None:
            if self._pool.alive_count() > 0:
                self._pool.terminate()
            self._pool = None
        if self._sink is not None:
            self._sink.close()
            self._sink = None

    def get_status(self) -> Dict[str, Any]:
        """Engine durumu"""
        status = {
            "engine": {
                "state": self._state.value,
                "is_running": self._state in (
                    RunState.RESOLVED,
                    RunState.PARTITIONED,
                    RunState.SCANNING,
                    RunState.AGGREGATING,
                ),
                "last_report": self._last_report.to_dict() if self._last_report else None,
            },
            "components": {
                "checkpoint_store": self._store.get_status().to_dict(),
            }
        }

        if self._sink:
            status["components"]["result_queue"] = self._sink.get_status().to_dict()

        if self._pool:
            status["components"]["scan_pool"] = self._pool.get_status().to_dict()

        return status

    def get_component_status(self, name: str) -> Optional[ComponentStatus]:
        """Belirli component durumu"""
        if name == "checkpoint_store":
            return self._store.get_status()
        elif name == "result_queue" and self._sink:
            return self._sink.get_status()
        elif name == "scan_pool" and self._pool:
            return self._pool.get_status()
        return None
