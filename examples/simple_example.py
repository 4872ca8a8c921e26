#!/usr/bin/env python3
"""
Basit Kullanım Örneği - Prime Scanner

Bu örnek, Prime Scanner'ın temel kullanımını gösterir:
- Config oluşturma
- Geçici bir checkpoint dosyası üzerinde iki ardışık run
- Raporu ve dosyanın son kaydını okuma
"""

import multiprocessing
import sys
import tempfile
from pathlib import Path

from prime_scanner import ScanEngine, ScannerConfig, CsvCheckpointStore, ScannerError


def main():
    """Basit kullanım örneği"""
    print("=" * 60)
    print("BASİT KULLANIM ÖRNEĞİ")
    print("=" * 60)

    with tempfile.TemporaryDirectory() as tmp:
        checkpoint = Path(tmp) / "primes.csv"

        # 1. Config oluştur: 4 worker x 25.000
        config = ScannerConfig(
            batch_size=25_000,
            worker_count=4,
            checkpoint_path=str(checkpoint)
        )
        print(f"\n📊 Config:")
        print(f"   Workers: {config.worker_count}")
        print(f"   Batch size: {config.batch_size}")
        print(f"   Checkpoint: {config.checkpoint_path}")

        try:
            # 2. İlk run: store boş, 0'dan başlar
            report = ScanEngine(config).run()
            print(f"\n✅ İlk run: {report.summary()}")

            # 3. İkinci run: son asaldan devam eder
            report = ScanEngine(config).run()
            print(f"✅ İkinci run: {report.summary()}")

        except ScannerError as e:
            print(f"\n❌ Hata: {e}")
            return 1

        store = CsvCheckpointStore(checkpoint)
        print(f"\n📦 Dosyadaki son asal: {store.read_last()}")
        print(f"   Toplam kayıt: {len(store.read_all()):,}")

    return 0


if __name__ == "__main__":
    # Multiprocessing için gerekli
    multiprocessing.set_start_method('spawn', force=True)
    sys.exit(main())
