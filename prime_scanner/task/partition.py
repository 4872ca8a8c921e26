"""
Partition (Aralık) Sınıfı

Bu modül, taranacak tamsayı aralığını worker'lara bölen fonksiyonu ve
her worker'ın sahip olduğu yarı açık [lo, hi) aralığını içerir.

Kullanım:
    partitions = partition(start=98, batch_size=100, worker_count=2)
    # [Partition(index=0, lo=98, hi=198), Partition(index=1, lo=198, hi=298)]
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Sequence, Tuple

from ..core.exceptions import ConfigError, ScanRangeOverflow

# Taranabilecek en büyük değer (64-bit işaretli tamsayı sınırı)
MAX_SCAN_VALUE = 2 ** 63 - 1


@dataclass(frozen=True)
class Partition:
    """
    Aralık tanımı

    Bir partition şunları içerir:
    - Index: Run içindeki sırası (0'dan başlar)
    - lo: Alt sınır (dahil)
    - hi: Üst sınır (hariç)

    Partition'lar queue'ya/process'e gönderilmeden önce dict'e dönüştürülebilir.
    """
    index: int
    lo: int
    hi: int

    def __post_init__(self):
        if self.lo < 0:
            raise ConfigError(f"Partition alt sınırı negatif olamaz: {self.lo}", code="CFG001")
        if self.hi <= self.lo:
            raise ConfigError(f"Partition boş: [{self.lo}, {self.hi})", code="CFG001")

    @property
    def width(self) -> int:
        return self.hi - self.lo

    def __contains__(self, value: int) -> bool:
        return self.lo <= value < self.hi

    def scan_candidates(self) -> Iterator[int]:
        """
        Test edilecek adayları üretir

        lo < 3 ise önce 2 (tek çift asal) üretilir ve tarama 3'ten devam eder.
        Sonrasında sadece tek sayılar, hi hariç.
        """
        start = self.lo
        if start < 3:
            yield 2
            start = 3

        if start % 2 == 0:
            start += 1

        yield from range(start, self.hi, 2)

    def to_dict(self) -> Dict[str, Any]:
        """Dict'e dönüştür (queue için)"""
        return {
            "index": self.index,
            "lo": self.lo,
            "hi": self.hi,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Partition":
        """Dict'ten Partition objesi oluşturur"""
        return cls(index=data["index"], lo=data["lo"], hi=data["hi"])

    def __str__(self):
        return f"[{self.lo}, {self.hi})"


def partition(start: int, batch_size: int, worker_count: int) -> List[Partition]:
    """
    Aralığı worker'lara böler

    Partition i, [start + i*batch_size, start + (i+1)*batch_size) aralığını kapsar.
    Partition'lar ayrıktır ve birlikte [start, start + worker_count*batch_size)
    aralığını boşluksuz, artan sırada kaplar.

    Args:
        start: Başlangıç değeri (>= 0)
        batch_size: Her partition'ın genişliği (>= 1)
        worker_count: Partition sayısı (>= 1)

    Returns:
        List[Partition]: worker_count adet partition

    Raises:
        ConfigError: Parametreler geçersizse
        ScanRangeOverflow: Son değer MAX_SCAN_VALUE'yu aşıyorsa
    """
    if start < 0:
        raise ConfigError(f"start negatif olamaz: {start}", code="CFG001")
    if batch_size < 1:
        raise ConfigError(f"batch_size en az 1 olmalı: {batch_size}", code="CFG001")
    if worker_count < 1:
        raise ConfigError(f"worker_count en az 1 olmalı: {worker_count}", code="CFG001")

    end = start + worker_count * batch_size
    if end - 1 > MAX_SCAN_VALUE:
        raise ScanRangeOverflow(
            f"Aralık sonu {end - 1} > {MAX_SCAN_VALUE}, tarama başlatılmadı",
            end=end
        )

    return [
        Partition(
            index=i,
            lo=start + i * batch_size,
            hi=start + (i + 1) * batch_size
        )
        for i in range(worker_count)
    ]


def covered_range(partitions: Sequence[Partition]) -> Tuple[int, int]:
    """Partition'ların kapsadığı [lo, hi) aralığı"""
    if not partitions:
        raise ConfigError("Partition listesi boş", code="CFG001")
    return partitions[0].lo, partitions[-1].hi
