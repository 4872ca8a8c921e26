"""
ScanReport (Rapor) Sınıfı

Bu modül, tamamlanan bir run'ın özetini içerir.
Rapor çekirdek sözleşmenin parçası değildir, CLI ve log için üretilir.

Kullanım:
    report = ScanReport(start=0, end=100, worker_count=1, batch_size=100, ...)
    print(report.summary())
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


@dataclass
class ScanReport:
    """
    Run raporu

    Bir rapor şunları içerir:
    - Aralık: [start, end) ve partition düzeni
    - Sonuç: Bulunan asal sayısı, ilk ve son asal
    - Zaman bilgileri: Başlangıç ve bitiş zamanı
    """
    start: int
    end: int
    worker_count: int
    batch_size: int
    primes_found: int = 0
    first_prime: Optional[int] = None
    last_prime: Optional[int] = None
    started_at: Optional[datetime] = None
    completed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def duration(self) -> Optional[float]:
        """
        Çalışma süresi (saniye)

        Returns:
            float: Başlangıç ve bitiş zamanı varsa süre, yoksa None
        """
        if self.started_at and self.completed_at:
            return (self.completed_at - self.started_at).total_seconds()
        return None

    def summary(self) -> str:
        """İnsan okunabilir tek satır özet"""
        text = f"{self.start}-{self.end} aralığında {self.primes_found} asal bulundu"
        if self.duration is not None:
            text += f" ({self.duration:.3f} saniye)"
        return text

    def to_dict(self) -> Dict[str, Any]:
        """Dict'e dönüştür"""
        return {
            "start": self.start,
            "end": self.end,
            "worker_count": self.worker_count,
            "batch_size": self.batch_size,
            "primes_found": self.primes_found,
            "first_prime": self.first_prime,
            "last_prime": self.last_prime,
            "duration": self.duration,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
