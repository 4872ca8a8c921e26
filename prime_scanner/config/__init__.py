"""
Tarayıcı Yapılandırması

Bu modül, ScanEngine'in tüm yapılandırma ayarlarını içerir.
Tek bir config sınıfı ile tüm ayarlar yönetilir.

Kullanım:
    config = ScannerConfig(
        batch_size=100_000,
        worker_count=4,
        checkpoint_path="primes.csv"
    )
    engine = ScanEngine(config)
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import multiprocessing

from ..core.enums import WorkerMode


@dataclass
class ScannerConfig:
    """
    Tarayıcı yapılandırması - Tüm ayarlar burada

    Bu sınıf, ScanEngine'in tüm yapılandırma ayarlarını içerir:
    - Tarama ayarları: Batch genişliği, worker sayısı, güven turu sayısı
    - Store ayarları: Checkpoint dosyasının yolu
    - Genel ayarlar: Worker modu, log level, poll timeout

    Varsayılan değerler makul seçilmiştir, çoğu durumda değiştirmeye gerek yoktur.
    """
    # Tarama ayarları
    batch_size: int = 1_000_000
    worker_count: Optional[int] = 9  # None = otomatik (CPU sayısı)
    confidence: int = 20  # Miller-Rabin tur sayısı, hata olasılığı < 4^-20

    # Store ayarları
    checkpoint_path: str = "primes.csv"

    # Genel ayarlar
    worker_mode: str = WorkerMode.PROCESS.value
    pin_cpus: bool = False
    log_level: str = "INFO"
    queue_poll_timeout: float = 1.0

    def __post_init__(self):
        """Değerleri doğrula ve otomatik ayarla"""
        # Worker sayısı otomatik hesaplama
        if self.worker_count is None:
            self.worker_count = max(1, multiprocessing.cpu_count())

        # Validasyon
        if self.batch_size < 1:
            raise ValueError("batch_size en az 1 olmalı")
        if self.worker_count < 1:
            raise ValueError("worker_count en az 1 olmalı")
        if self.confidence < 1:
            raise ValueError("confidence en az 1 olmalı")
        if not self.checkpoint_path:
            raise ValueError("checkpoint_path boş olamaz")
        if self.queue_poll_timeout <= 0:
            raise ValueError("queue_poll_timeout pozitif olmalı")

        # Worker modu kontrolü
        valid_modes = [m.value for m in WorkerMode]
        if self.worker_mode.lower() not in valid_modes:
            raise ValueError(f"Geçersiz worker_mode: {self.worker_mode}")
        self.worker_mode = self.worker_mode.lower()

        # Log level kontrolü
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"Geçersiz log_level: {self.log_level}")

        self.log_level = self.log_level.upper()

    @property
    def mode(self) -> WorkerMode:
        return WorkerMode(self.worker_mode)

    def to_dict(self) -> Dict[str, Any]:
        """Dict'e dönüştür (JSON config dosyası için)"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScannerConfig":
        """
        Dict'ten config oluşturur

        Bilinmeyen anahtarlar yok sayılır, eksik anahtarlar varsayılanı alır.
        """
        defaults = cls()
        return cls(
            batch_size=data.get("batch_size", defaults.batch_size),
            worker_count=data.get("worker_count", defaults.worker_count),
            confidence=data.get("confidence", defaults.confidence),
            checkpoint_path=data.get("checkpoint_path", defaults.checkpoint_path),
            worker_mode=data.get("worker_mode", defaults.worker_mode),
            pin_cpus=data.get("pin_cpus", defaults.pin_cpus),
            log_level=data.get("log_level", defaults.log_level),
            queue_poll_timeout=data.get("queue_poll_timeout", defaults.queue_poll_timeout),
        )
