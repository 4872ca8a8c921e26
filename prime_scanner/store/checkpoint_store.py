"""
Checkpoint Store Modülü

Bu modül, bulunan asalların kalıcı olarak saklandığı store'u içerir.
Store sadece iki işlem sunar: son değeri oku, yeni değerleri sona ekle.

Dosya formatı: satır başına bir tamsayı, her satır "\\n" ile biter,
tüm run'lar boyunca kesin artan sırada.

Kullanım:
    store = CsvCheckpointStore("primes.csv")
    last = store.read_last()        # None = önceki kayıt yok
    store.append_all([101, 103])
"""

import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from ..core.exceptions import CheckpointCorrupt, CheckpointReadFailure, CheckpointWriteFailure
from ..status import ComponentStatus


class CheckpointStore(ABC):
    """
    Checkpoint Store - soyut arayüz

    Engine store'a sadece bu iki işlem üzerinden erişir; testler
    MemoryCheckpointStore ile dosya sistemi olmadan çalışır.
    """

    @abstractmethod
    def read_last(self) -> Optional[int]:
        """
        Son kaydedilen asalı döndürür

        Returns:
            int veya None (önceki kayıt yok)

        Raises:
            CheckpointCorrupt: Son kayıt tamsayı değilse
            CheckpointReadFailure: Store okunamıyorsa
        """

    @abstractmethod
    def append_all(self, values: Sequence[int]) -> None:
        """
        Değerleri verilen sırayla sona ekler

        Raises:
            CheckpointWriteFailure: Yazma başarısızsa
        """

    def get_status(self) -> ComponentStatus:
        """Component durumu"""
        return ComponentStatus(name="checkpoint_store", health="healthy", metrics={})


def _parse_record(text: str, path: Optional[str] = None) -> int:
    """Tek bir kaydı tamsayıya çevirir"""
    record = text.strip()
    if not record.isdigit():
        raise CheckpointCorrupt(f"Son kayıt tamsayı değil: {record!r}", path=path, record=record)
    return int(record)


class CsvCheckpointStore(CheckpointStore):
    """
    Satır tabanlı dosya store'u

    Özellikler:
    - Kuyruktan okuma: Son kayıt için dosyanın sadece sonu okunur
    - Tek seferde append: Tüm kayıtlar tek write + fsync ile yazılır,
      çökme durumunda en fazla yeni kayıtların bir öneki kalır
    - Yırtık kayıt tespiti: "\\n" ile bitmeyen son satır öncekinden
      büyük değilse bozuk sayılır
    """

    # İlk okuma penceresi (byte), kayıt bulunamazsa ikiye katlanır
    TAIL_WINDOW = 512

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._total_appended = 0
        self._logger = logging.getLogger("checkpoint_store")

    @property
    def path(self) -> Path:
        return self._path

    def read_last(self) -> Optional[int]:
        path = str(self._path)
        if not self._path.exists():
            return None

        try:
            with self._path.open("rb") as f:
                f.seek(0, os.SEEK_END)
                size = f.tell()
                if size == 0:
                    return None

                window = self.TAIL_WINDOW
                while True:
                    offset = max(0, size - window)
                    f.seek(offset)
                    chunk = f.read(size - offset)

                    last = self._last_record(chunk, at_file_start=(offset == 0))
                    if last is not None or offset == 0:
                        break
                    window *= 2
        except OSError as e:
            raise CheckpointReadFailure(f"Checkpoint okunamadı: {e}", path=path) from e

        if last is None:
            return None  # Dosyada sadece boş satırlar var

        self._logger.debug(f"Son kayıt: {last} ({path})")
        return last

    def _last_record(self, chunk: bytes, at_file_start: bool) -> Optional[int]:
        """
        Chunk içindeki son kaydı bulur

        Chunk dosyanın başından başlamıyorsa ilk satır yarım olabilir,
        o satır tek başına kayıt sayılmaz. Satır sonu olmayan son kayıt
        sadece bir önceki kayıttan büyükse kabul edilir; değilse yarım
        yazılmış bir sayıdır.
        """
        try:
            text = chunk.decode("ascii")
        except UnicodeDecodeError as e:
            raise CheckpointCorrupt(
                f"Checkpoint ASCII değil: {e}", path=str(self._path)
            ) from e

        lines = text.split("\n")
        if not at_file_start:
            lines = lines[1:]  # Pencerenin ilk satırı yarım olabilir

        records = [line for line in lines if line.strip()]
        if not records:
            return None

        last = _parse_record(records[-1], path=str(self._path))
        if text.endswith("\n") or not lines[-1].strip():
            return last

        # Son satır "\n" ile bitmiyor: önceki kayıtla karşılaştır
        if len(records) < 2:
            if not at_file_start:
                return None  # Önceki kayıt pencerenin dışında, pencere büyür
            return last

        previous = _parse_record(records[-2], path=str(self._path))
        if last <= previous:
            raise CheckpointCorrupt(
                f"Son kayıt ({last}) öncekinden ({previous}) büyük değil (yarım yazma)",
                path=str(self._path),
                record=records[-1].strip()
            )
        return last

    def _ends_with_newline(self) -> bool:
        """Dosya boşsa veya "\\n" ile bitiyorsa True"""
        if not self._path.exists():
            return True
        with self._path.open("rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() == 0:
                return True
            f.seek(-1, os.SEEK_END)
            return f.read(1) == b"\n"

    def append_all(self, values: Sequence[int]) -> None:
        if not values:
            return

        payload = "".join(f"{value}\n" for value in values)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            if not self._ends_with_newline():
                payload = "\n" + payload  # Önceki son satırı kapat
            with self._path.open("a", encoding="ascii", newline="\n") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise CheckpointWriteFailure(
                f"Checkpoint yazılamadı, {len(values)} asal kayboldu: {e}",
                path=str(self._path),
                pending=len(values)
            ) from e

        self._total_appended += len(values)
        self._logger.info(f"{len(values)} asal eklendi: {self._path}")

    def read_all(self) -> List[int]:
        """Tüm kayıtları okur (doğrulama ve testler için)"""
        if not self._path.exists():
            return []
        try:
            with self._path.open("r", encoding="ascii") as f:
                return [_parse_record(line, path=str(self._path)) for line in f if line.strip()]
        except OSError as e:
            raise CheckpointReadFailure(f"Checkpoint okunamadı: {e}", path=str(self._path)) from e

    def get_status(self) -> ComponentStatus:
        """Component durumu"""
        exists = self._path.exists()
        metrics = {
            "path": str(self._path),
            "exists": exists,
            "size_bytes": self._path.stat().st_size if exists else 0,
            "total_appended": self._total_appended,
        }
        return ComponentStatus(name="checkpoint_store", health="healthy", metrics=metrics)


class MemoryCheckpointStore(CheckpointStore):
    """
    Bellek içi store

    Testler ve dosya gerektirmeyen kullanım için.
    append_all çağrıları kaydedilir, böylece tek yazma kontrol edilebilir.
    """

    def __init__(self, values: Optional[Iterable[int]] = None):
        self._values: List[int] = list(values or [])
        self._lock = threading.Lock()
        self.append_calls = 0

    @property
    def values(self) -> List[int]:
        with self._lock:
            return list(self._values)

    def read_last(self) -> Optional[int]:
        with self._lock:
            if not self._values:
                return None
            return self._values[-1]

    def append_all(self, values: Sequence[int]) -> None:
        if not values:
            return
        with self._lock:
            self._values.extend(values)
            self.append_calls += 1

    def get_status(self) -> ComponentStatus:
        """Component durumu"""
        with self._lock:
            metrics = {"size": len(self._values), "append_calls": self.append_calls}
        return ComponentStatus(name="checkpoint_store", health="healthy", metrics=metrics)
