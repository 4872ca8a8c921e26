"""
Result Aggregator ve Scan Worker Testleri

Kuyruğa elle öğe koyarak bariyer, sıralama, hata ve tek yazma
davranışını; scan_partition ile worker normalizasyonunu test eder.
"""

import signal
import threading

import pytest

from prime_scanner import (
    MemoryCheckpointStore,
    Partition,
    ComponentStatus,
    WorkerMode,
    WorkerError,
    RunInterrupted,
)
from prime_scanner.engine import ResultAggregator
from prime_scanner.queue import ResultQueue
from prime_scanner.worker import ScanPool, ScanWorker, WorkerDone, scan_partition

from conftest import PRIMES_BELOW_100, PRIMES_98_TO_198, reference_primes


class FakePool:
    """alive_count/get_status sağlayan sahte pool"""

    def __init__(self, alive=0):
        self.alive = alive

    def alive_count(self):
        return self.alive

    def get_status(self):
        return ComponentStatus(name="scan_pool", health="healthy",
                               metrics={"alive_workers": self.alive})


def marker(index, found=0, error=None):
    return WorkerDone(worker_id=f"scan-{index}", partition_index=index,
                      primes_found=found, error=error).to_dict()


@pytest.fixture
def sink():
    return ResultQueue(WorkerMode.THREAD)


class TestScanPartition:
    """scan_partition ve ScanWorker testleri"""

    def test_origin_partition(self, list_sink):
        found = scan_partition(Partition(index=0, lo=0, hi=100), list_sink, 20)

        assert found == 25
        assert list_sink.items == PRIMES_BELOW_100

    def test_resume_partition(self, list_sink):
        scan_partition(Partition(index=0, lo=98, hi=198), list_sink, 20)

        assert list_sink.items == PRIMES_98_TO_198

    @pytest.mark.parametrize("lo", [0, 1, 2])
    def test_two_emitted_once_below_three(self, list_sink, lo):
        scan_partition(Partition(index=0, lo=lo, hi=50), list_sink, 20)

        assert list_sink.items.count(2) == 1
        assert list_sink.items == reference_primes(0, 50)

    def test_two_never_emitted_from_three(self, list_sink):
        scan_partition(Partition(index=0, lo=3, hi=50), list_sink, 20)

        assert 2 not in list_sink.items

    def test_upper_bound_excluded(self, list_sink):
        scan_partition(Partition(index=0, lo=90, hi=97), list_sink, 20)

        assert list_sink.items == []

    def test_stop_event(self, list_sink):
        stop = threading.Event()
        stop.set()

        with pytest.raises(RunInterrupted):
            scan_partition(Partition(index=0, lo=0, hi=100), list_sink, 20, stop)

    def test_worker_always_sends_marker(self, list_sink, monkeypatch):
        """Hata olsa da tamamlanma işareti gönderilir"""
        def broken(n, confidence):
            raise RuntimeError("oracle bozuk")

        monkeypatch.setattr("prime_scanner.worker.scan_worker.is_probably_prime", broken)

        done = ScanWorker("scan-0", Partition(index=0, lo=0, hi=100), list_sink, 20).run()

        assert not done.is_success
        assert "oracle bozuk" in done.error
        assert WorkerDone.is_marker(list_sink.items[-1])

    def test_worker_marker_is_last(self, list_sink):
        done = ScanWorker("scan-0", Partition(index=0, lo=0, hi=30), list_sink, 20).run()

        assert done.primes_found == 10
        assert list_sink.primes == reference_primes(0, 30)
        assert WorkerDone.from_dict(list_sink.items[-1]) == done


class TestResultAggregator:
    """ResultAggregator testleri"""

    def test_collect_sorts_across_workers(self, sink):
        for value in [197, 101, 103]:
            sink.put(value)
        sink.put(marker(1, 2))
        for value in [2, 97]:
            sink.put(value)
        sink.put(marker(0, 3))

        primes = ResultAggregator(sink, expected_workers=2, poll_timeout=0.05).collect()

        assert primes == [2, 97, 101, 103, 197]

    def test_collect_waits_for_all_markers(self, sink):
        """Bariyer: ikinci işaret gelene kadar bitmiş sayılmaz"""
        aggregator = ResultAggregator(sink, expected_workers=2, poll_timeout=0.05)
        result = {}

        def consume():
            result["primes"] = aggregator.collect()

        sink.put(5)
        sink.put(marker(0, 1))
        consumer = threading.Thread(target=consume)
        consumer.start()
        consumer.join(timeout=0.3)

        assert consumer.is_alive()
        assert aggregator.completed_workers == 1

        sink.put(3)
        sink.put(marker(1, 1))
        consumer.join(timeout=5.0)

        assert not consumer.is_alive()
        assert result["primes"] == [3, 5]

    def test_duplicate_is_error(self, sink):
        sink.put(7)
        sink.put(7)
        sink.put(marker(0, 2))

        with pytest.raises(WorkerError) as exc_info:
            ResultAggregator(sink, expected_workers=1, poll_timeout=0.05).collect()

        assert exc_info.value.code == "WRK006"

    def test_worker_error_marker(self, sink):
        sink.put(marker(0, error="RuntimeError: boom"))

        with pytest.raises(WorkerError) as exc_info:
            ResultAggregator(sink, expected_workers=1, poll_timeout=0.05).collect()

        assert exc_info.value.worker_id == "scan-0"

    def test_second_marker_for_partition(self, sink):
        sink.put(marker(0))
        sink.put(marker(0))

        with pytest.raises(WorkerError):
            ResultAggregator(sink, expected_workers=2, poll_timeout=0.05).collect()

    def test_dead_workers_without_marker(self, sink):
        """Worker'lar işaretsiz çıktıysa sonsuza kadar beklenmez"""
        sink.put(11)
        sink.put(marker(0, 1))

        aggregator = ResultAggregator(sink, expected_workers=2, pool=FakePool(alive=0),
                                      poll_timeout=0.05)

        with pytest.raises(WorkerError) as exc_info:
            aggregator.collect()

        assert exc_info.value.code == "WRK005"

    def test_stop_event(self, sink):
        stop = threading.Event()
        stop.set()

        aggregator = ResultAggregator(sink, expected_workers=1, pool=FakePool(alive=1),
                                      poll_timeout=0.05, stop_event=stop)

        with pytest.raises(RunInterrupted):
            aggregator.collect()

    def test_persist_single_append(self):
        store = MemoryCheckpointStore([97])
        aggregator = ResultAggregator(ResultQueue(WorkerMode.THREAD), expected_workers=1)

        written = aggregator.persist(store, PRIMES_98_TO_198, start=98)

        assert written == 20
        assert store.append_calls == 1
        assert store.values == [97] + PRIMES_98_TO_198

    def test_persist_empty_writes_nothing(self):
        store = MemoryCheckpointStore([97])
        aggregator = ResultAggregator(ResultQueue(WorkerMode.THREAD), expected_workers=1)

        assert aggregator.persist(store, [], start=98) == 0
        assert store.append_calls == 0

    def test_persist_rejects_values_behind_checkpoint(self):
        store = MemoryCheckpointStore([97])
        aggregator = ResultAggregator(ResultQueue(WorkerMode.THREAD), expected_workers=1)

        with pytest.raises(WorkerError):
            aggregator.persist(store, [89, 101], start=98)

        assert store.values == [97]

    def test_invalid_expected_workers(self, sink):
        with pytest.raises(WorkerError):
            ResultAggregator(sink, expected_workers=0)


class TestResultQueue:
    """ResultQueue testleri"""

    def test_get_timeout_returns_none(self, sink):
        assert sink.get(timeout=0.01) is None
        assert sink.get() is None

    def test_counters(self, sink):
        sink.put(3)
        sink.put(5)
        sink.get()

        metrics = sink.get_status().metrics
        assert metrics["total_put"] == 2
        assert metrics["total_get"] == 1
        assert metrics["mode"] == "thread"

    def test_process_mode_counters(self):
        """Process modunda eklenen sayısı worker'da kaldığı için raporlanmaz"""
        sink = ResultQueue(WorkerMode.PROCESS)
        try:
            sink.put(7)
            assert sink.get(timeout=5.0) == 7

            metrics = sink.get_status().metrics
            assert "total_put" not in metrics
            assert metrics["total_get"] == 1
            assert metrics["mode"] == "process"
        finally:
            sink.close()


class TestScanPool:
    """ScanPool process giriş noktası testleri"""

    def test_worker_process_resets_signal_handlers(self, list_sink):
        """Worker process'i ana process'in signal handler'larını kullanmaz"""
        def handler(signum, frame):
            pass

        previous_int = signal.signal(signal.SIGINT, handler)
        previous_term = signal.signal(signal.SIGTERM, handler)
        try:
            ScanPool._run_process("scan-0", Partition(0, 0, 10).to_dict(), list_sink, 20, None)

            assert signal.getsignal(signal.SIGINT) == signal.SIG_IGN
            assert signal.getsignal(signal.SIGTERM) == signal.SIG_DFL
        finally:
            signal.signal(signal.SIGINT, previous_int)
            signal.signal(signal.SIGTERM, previous_term)

        assert list_sink.primes == [2, 3, 5, 7]
        assert WorkerDone.is_marker(list_sink.items[-1])
