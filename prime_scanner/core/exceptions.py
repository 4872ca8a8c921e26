"""
Exception Hiyerarşisi

Bu modül, tarayıcıda kullanılan özel exception'ları içerir.
Tüm exception'lar ScannerError'dan türer.

Hiyerarşi:
    ScannerError (base)
    ├── ConfigError (yapılandırma hataları)
    │   └── ScanRangeOverflow (aralık sınırı aşıldı)
    ├── CheckpointError (checkpoint store hataları)
    │   ├── CheckpointCorrupt (son kayıt okunamıyor)
    │   ├── CheckpointReadFailure (store okunamıyor)
    │   └── CheckpointWriteFailure (append başarısız)
    ├── WorkerError (worker hataları)
    └── RunInterrupted (dış sinyal ile durduruldu)
"""

from typing import Optional


class ScannerError(Exception):
    """
    Tarayıcı Hataları - Base exception

    Tüm sistem hataları bu sınıftan türer.
    Hata mesajı ve kod içerir.
    """
    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code  # Hata kodu (örn: "CKP001")

    def __str__(self):
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(ScannerError):
    """
    Yapılandırma Hataları

    Config veya partition parametreleri geçersiz olduğunda oluşur.
    """
    pass


class ScanRangeOverflow(ConfigError):
    """Taranacak aralık MAX_SCAN_VALUE sınırını aşıyor"""

    def __init__(self, message: str, end: Optional[int] = None):
        super().__init__(message, code="CFG002")
        self.end = end


class CheckpointError(ScannerError):
    """
    Checkpoint Hataları

    Checkpoint store okuma/yazma sırasında oluşan hatalar.
    Store yolu ve denenen işlem bilgisi içerir.
    """
    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        path: Optional[str] = None,
        operation: Optional[str] = None
    ):
        super().__init__(message, code)
        self.path = path            # Hangi store
        self.operation = operation  # "read_last" veya "append_all"


class CheckpointCorrupt(CheckpointError):
    """Store mevcut ama son kaydı tamsayı olarak çözümlenemiyor"""

    def __init__(self, message: str, path: Optional[str] = None, record: Optional[str] = None):
        super().__init__(message, code="CKP001", path=path, operation="read_last")
        self.record = record


class CheckpointReadFailure(CheckpointError):
    """Store okunamıyor (izin, disk vb.)"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, code="CKP002", path=path, operation="read_last")


class CheckpointWriteFailure(CheckpointError):
    """
    Append başarısız

    Tarama tamamlandıktan sonra oluşur, bu run'da bulunan asallar kaybolur.
    """
    def __init__(self, message: str, path: Optional[str] = None, pending: int = 0):
        super().__init__(message, code="CKP003", path=path, operation="append_all")
        self.pending = pending  # Yazılamayan asal sayısı


class WorkerError(ScannerError):
    """
    Worker Hataları

    Scan worker process veya thread'lerinde oluşan hatalar.
    """
    def __init__(self, message: str, code: Optional[str] = None, worker_id: Optional[str] = None):
        super().__init__(message, code)
        self.worker_id = worker_id  # Hangi worker'da hata oldu


class RunInterrupted(ScannerError):
    """Run dış bir sinyal ile durduruldu, hiçbir şey yazılmadı"""

    def __init__(self, message: str = "Run durduruldu"):
        super().__init__(message, code="RUN001")
