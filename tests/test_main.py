"""
CLI Testleri

main() giriş noktasını thread modunda küçük run'larla test eder.
"""

import json

from prime_scanner.main import main, load_config_from_file, create_default_config_file
from prime_scanner.main import EXIT_OK, EXIT_FAILED

from conftest import PRIMES_BELOW_100, PRIMES_98_TO_198

SMALL_RUN = ["--workers", "1", "--batch-size", "100", "--mode", "thread"]


class TestMain:
    """main() testleri"""

    def test_first_run(self, tmp_path, capsys):
        path = tmp_path / "primes.csv"

        code = main(SMALL_RUN + ["--checkpoint", str(path)])

        assert code == EXIT_OK
        assert path.read_text().split() == [str(p) for p in PRIMES_BELOW_100]
        assert "25" in capsys.readouterr().out

    def test_resume_run(self, tmp_path):
        path = tmp_path / "primes.csv"
        path.write_text("97\n")

        assert main(SMALL_RUN + ["--checkpoint", str(path)]) == EXIT_OK
        assert path.read_text().split() == [str(p) for p in [97] + PRIMES_98_TO_198]

    def test_corrupt_checkpoint_exit_code(self, tmp_path, capsys):
        path = tmp_path / "primes.csv"
        path.write_text("97\n1x3\n")

        code = main(SMALL_RUN + ["--checkpoint", str(path)])

        assert code == EXIT_FAILED
        assert path.read_text() == "97\n1x3\n"
        assert "CKP001" in capsys.readouterr().err

    def test_invalid_override(self, tmp_path):
        path = tmp_path / "primes.csv"

        code = main(["--workers", "0", "--mode", "thread", "--checkpoint", str(path)])

        assert code == EXIT_FAILED
        assert not path.exists()

    def test_config_file(self, tmp_path):
        path = tmp_path / "primes.csv"
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "batch_size": 100,
            "worker_count": 1,
            "worker_mode": "thread",
            "checkpoint_path": str(path),
            "queue_poll_timeout": 0.05,
        }))

        assert main(["--config", str(config_path)]) == EXIT_OK
        assert path.read_text().split()[-1] == "97"

    def test_missing_config_file(self, tmp_path):
        assert main(["--config", str(tmp_path / "yok.json")]) == EXIT_FAILED

    def test_create_config(self, tmp_path):
        config_path = tmp_path / "config.json"

        assert main(["--create-config", str(config_path)]) == EXIT_OK

        config = load_config_from_file(str(config_path))
        assert config is not None
        assert config.batch_size == 1_000_000
        assert config.worker_count == 9

    def test_create_default_config_file_returns_path(self, tmp_path):
        target = str(tmp_path / "c.json")

        assert create_default_config_file(target) == target
        assert json.loads((tmp_path / "c.json").read_text())["confidence"] == 20

    def test_config_file_with_wrong_type(self, tmp_path, capsys):
        """Yanlış tipte değer içeren config dosyası traceback değil hata kodu verir"""
        path = tmp_path / "primes.csv"
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "batch_size": "100",
            "worker_mode": "thread",
            "checkpoint_path": str(path),
        }))

        assert load_config_from_file(str(config_path)) is None
        assert main(["--config", str(config_path)]) == EXIT_FAILED
        assert "Config yükleme hatası" in capsys.readouterr().err
        assert not path.exists()
