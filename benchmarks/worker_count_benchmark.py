#!/usr/bin/env python3
"""
Scalability - Worker Count Benchmark

Bu benchmark, worker sayısının tarama süresine etkisini ölçer.
Toplam aralık sabittir: worker sayısı arttıkça batch_size küçülür.
Speedup factor ve efficiency ratio hesaplanır.
"""

import argparse
import multiprocessing
import sys
import time
from dataclasses import dataclass
from typing import List, Optional

from prime_scanner import ScanEngine, ScannerConfig, MemoryCheckpointStore


@dataclass
class WorkerScalabilityResult:
    """Worker scalability sonuçları"""
    num_workers: int
    total_range: int
    primes_found: int
    parallel_time: float = 0.0
    speedup_factor: float = 0.0  # Baseline'a göre hızlanma
    efficiency_ratio: float = 0.0  # Speedup / num_workers (ideal = 1.0)


def run_worker_scalability_test(
    num_workers: int,
    total_range: int,
    start: int,
    mode: str,
    baseline_time: Optional[float] = None
) -> WorkerScalabilityResult:
    """
    Tek bir worker sayısı için run çalıştırır

    Args:
        num_workers: Worker sayısı
        total_range: Taranacak toplam aralık genişliği
        start: Başlangıç değeri (store'a start - 1 konur)
        mode: "process" veya "thread"
        baseline_time: Baseline süre (genelde 1 worker)

    Returns:
        WorkerScalabilityResult: Sonuçlar
    """
    print(f"\n🧪 {num_workers} worker, aralık {total_range:,} ({mode})")

    config = ScannerConfig(
        batch_size=total_range // num_workers,
        worker_count=num_workers,
        worker_mode=mode,
        log_level="WARNING",
        queue_poll_timeout=0.1,
    )
    # Her ölçüm aynı noktadan başlasın diye bellek içi store
    store = MemoryCheckpointStore([start - 1] if start > 0 else [])

    start_time = time.time()
    report = ScanEngine(config, store=store).run()
    parallel_time = time.time() - start_time

    speedup_factor = 0.0
    if baseline_time and parallel_time > 0:
        speedup_factor = baseline_time / parallel_time
    efficiency_ratio = speedup_factor / num_workers if num_workers > 0 else 0.0

    print(f"   - Süre: {parallel_time:.3f} saniye, {report.primes_found:,} asal")
    if baseline_time:
        print(f"   - Speedup factor: {speedup_factor:.2f}x")
        print(f"   - Efficiency ratio: {efficiency_ratio:.3f} (1.0 = perfect)")

    return WorkerScalabilityResult(
        num_workers=num_workers,
        total_range=total_range,
        primes_found=report.primes_found,
        parallel_time=parallel_time,
        speedup_factor=speedup_factor,
        efficiency_ratio=efficiency_ratio,
    )


def print_summary_table(results: List[WorkerScalabilityResult]):
    print(f"\n{'='*60}")
    print("📊 ÖZET")
    print(f"{'='*60}")
    for result in results:
        print(f"   {result.num_workers:>3}W → {result.parallel_time:>7.3f}s → "
              f"{result.speedup_factor:>6.2f}x → {result.efficiency_ratio:>6.3f}")

    # Tüm ölçümler aynı asal kümesini bulmalı
    counts = {r.primes_found for r in results}
    if len(counts) != 1:
        print(f"\n   ⚠️  Worker sayıları farklı sonuç verdi: {sorted(counts)}")


def main():
    """Ana fonksiyon"""
    parser = argparse.ArgumentParser(description="Prime Scanner worker count benchmark")
    parser.add_argument('--range', type=int, default=2_000_000, dest='total_range')
    parser.add_argument('--start', type=int, default=10_000_000)
    parser.add_argument('--mode', choices=['process', 'thread'], default='process')
    args = parser.parse_args()

    cpu_count = multiprocessing.cpu_count()
    worker_counts = [w for w in (1, 2, 4, 8, 16) if w <= cpu_count * 2]

    print("="*60)
    print("🚀 Prime Scanner - Scalability (Worker Count) Benchmark")
    print("="*60)
    print(f"   - CPU Çekirdek Sayısı: {cpu_count}")
    print(f"   - Test Edilecek Worker Sayıları: {worker_counts}")

    results = []
    baseline_time = None
    for num_workers in worker_counts:
        result = run_worker_scalability_test(
            num_workers, args.total_range, args.start, args.mode, baseline_time
        )
        if baseline_time is None:
            baseline_time = result.parallel_time
        results.append(result)

    print_summary_table(results)
    return 0


if __name__ == "__main__":
    sys.exit(main())
