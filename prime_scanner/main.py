#!/usr/bin/env python3
"""
Prime Scanner - Ana Giriş Noktası

Kullanım:
    python -m prime_scanner.main
    python -m prime_scanner.main --config config/custom_config.json
    python -m prime_scanner.main --workers 4 --batch-size 100000
"""

import argparse
import json
import os
import signal
import sys
from pathlib import Path
from typing import Optional

from .engine import ScanEngine
from .config import ScannerConfig
from .core.enums import WorkerMode
from .core.exceptions import ScannerError, RunInterrupted

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INTERRUPTED = 130


class PrimeScannerApp:
    """Ana uygulama sınıfı"""

    def __init__(self, config: Optional[ScannerConfig] = None):
        self.config = config or ScannerConfig()
        self.engine: Optional[ScanEngine] = None

    def run(self) -> int:
        """Tek bir run çalıştır, çıkış kodunu döndür"""
        print("🚀 Prime Scanner başlatılıyor...")
        print(f"   Config: workers={self.config.worker_count}, "
              f"batch_size={self.config.batch_size}, "
              f"mode={self.config.worker_mode}, "
              f"checkpoint={self.config.checkpoint_path}")

        self.engine = ScanEngine(self.config)

        # Signal handler'ları ayarla
        previous_int = signal.signal(signal.SIGINT, self._signal_handler)
        previous_term = signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            report = self.engine.run()
        except RunInterrupted as e:
            print(f"\n⚠️  Durduruldu, checkpoint değişmedi: {e}", file=sys.stderr)
            return EXIT_INTERRUPTED
        except ScannerError as e:
            print(f"❌ Run başarısız: {e}", file=sys.stderr)
            return EXIT_FAILED
        finally:
            signal.signal(signal.SIGINT, previous_int)
            signal.signal(signal.SIGTERM, previous_term)

        print(f"✅ {report.summary()}")
        if report.primes_found:
            print(f"   İlk: {report.first_prime}, son: {report.last_prime}")
        return EXIT_OK

    def _signal_handler(self, signum, frame):
        """Signal handler - yazmadan durdur"""
        print(f"\n⚠️  Signal alındı ({signum}), durduruluyor...", file=sys.stderr)
        if self.engine:
            self.engine.request_stop()


def load_config_from_file(config_path: str) -> Optional[ScannerConfig]:
    """JSON dosyasından config yükle"""
    try:
        # Eğer relative path ise, config klasöründen başlat
        if not os.path.isabs(config_path):
            # Önce mevcut dizinde dene
            if not os.path.exists(config_path):
                # Config klasöründe dene
                config_dir = Path(__file__).parent / "config"
                config_path_in_dir = config_dir / config_path
                if config_path_in_dir.exists():
                    config_path = str(config_path_in_dir)

        with open(config_path, 'r') as f:
            data = json.load(f)

        return ScannerConfig.from_dict(data)

    except (OSError, ValueError, TypeError) as e:
        print(f"⚠️  Config yükleme hatası: {e}", file=sys.stderr)
        return None


def create_default_config_file(path: Optional[str] = None) -> str:
    """Varsayılan config dosyası oluştur"""
    if path is None:
        # Varsayılan olarak config klasörüne kaydet
        config_dir = Path(__file__).parent / "config"
        config_dir.mkdir(exist_ok=True)
        path = str(config_dir / "config.json")

    with open(path, 'w') as f:
        json.dump(ScannerConfig().to_dict(), f, indent=2)

    print(f"✅ Varsayılan config dosyası oluşturuldu: {path}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Prime Scanner - Kaldığı yerden devam eden paralel asal tarayıcı",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Örnekler:
  # Varsayılan ayarlarla bir run (9 worker x 1.000.000)
  python -m prime_scanner.main

  # Config dosyası ile
  python -m prime_scanner.main --config config/my_config.json

  # Küçük bir run, thread modunda
  python -m prime_scanner.main --workers 2 --batch-size 1000 --mode thread

  # Varsayılan config dosyası oluştur
  python -m prime_scanner.main --create-config
        """
    )

    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Config dosyası yolu (JSON). Varsayılan: config/config.json'
    )

    parser.add_argument(
        '--create-config',
        nargs='?',
        const='',
        metavar='PATH',
        help='Varsayılan config.json dosyası oluştur ve çık'
    )

    parser.add_argument(
        '--batch-size', '-b',
        type=int,
        help='Worker başına aralık genişliği (varsayılan: 1000000)'
    )

    parser.add_argument(
        '--workers', '-w',
        type=int,
        help='Worker sayısı (varsayılan: 9)'
    )

    parser.add_argument(
        '--confidence',
        type=int,
        help='Miller-Rabin tur sayısı (varsayılan: 20)'
    )

    parser.add_argument(
        '--checkpoint',
        type=str,
        help='Checkpoint dosyası (varsayılan: primes.csv)'
    )

    parser.add_argument(
        '--mode',
        type=str,
        choices=[m.value for m in WorkerMode],
        help='Worker modu (varsayılan: process)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        help='Log seviyesi (varsayılan: INFO)'
    )

    return parser


def main(argv=None) -> int:
    """Ana fonksiyon"""
    args = build_parser().parse_args(argv)

    # Config dosyası oluştur
    if args.create_config is not None:
        create_default_config_file(args.create_config or None)
        return EXIT_OK

    # Config yükle
    config = None

    if args.config:
        config = load_config_from_file(args.config)
        if not config:
            return EXIT_FAILED
    else:
        # Varsayılan config dosyasını dene
        default_config_path = Path(__file__).parent / "config" / "config.json"
        if default_config_path.exists():
            config = load_config_from_file(str(default_config_path))

    if config is None:
        config = ScannerConfig()

    # Komut satırı argümanları ile config'i güncelle
    overrides = {
        "batch_size": args.batch_size,
        "worker_count": args.workers,
        "confidence": args.confidence,
        "checkpoint_path": args.checkpoint,
        "worker_mode": args.mode,
        "log_level": args.log_level,
    }
    data = config.to_dict()
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = ScannerConfig.from_dict(data)
    except ValueError as e:
        print(f"❌ Geçersiz config: {e}", file=sys.stderr)
        return EXIT_FAILED

    return PrimeScannerApp(config).run()


if __name__ == "__main__":
    sys.exit(main())
