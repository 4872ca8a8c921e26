"""
Core Enums Modülü

Bu modül, sistemde kullanılan enum'ları içerir:
- WorkerMode: Scan worker'ların çalışma biçimi (PROCESS veya THREAD)
- RunState: Bir run'ın yaşam döngüsündeki durumu
"""

from enum import Enum


class WorkerMode(Enum):
    """
    Worker Modu

    Her partition için hangi çalışma birimi açılacağını belirler.

    - PROCESS: multiprocessing.Process (gerçek paralellik)
    - THREAD: threading.Thread (testler, hızlı başlatma)
    """
    PROCESS = "process"
    THREAD = "thread"


class RunState(Enum):
    """
    Run Durumu

    Bir run şu sırayla ilerler:
    IDLE → RESOLVED → PARTITIONED → SCANNING → AGGREGATING → PERSISTED → DONE

    PERSISTED'dan önceki herhangi bir hata FAILED ile biter, store'a yazılmaz.
    """
    IDLE = "idle"                # Henüz başlamadı
    RESOLVED = "resolved"        # Başlangıç değeri bulundu
    PARTITIONED = "partitioned"  # Aralıklar atandı
    SCANNING = "scanning"        # Worker'lar çalışıyor
    AGGREGATING = "aggregating"  # Sonuçlar toplanıyor
    PERSISTED = "persisted"      # Store'a yazıldı
    DONE = "done"                # Tamamlandı
    FAILED = "failed"            # Başarısız
