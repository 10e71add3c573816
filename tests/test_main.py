"""Tests for the command-line entry point: output and exit status."""

from __future__ import annotations

import builtins
import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from cfvalidator.config import settings
from cfvalidator.decoders.municipalities import get_municipalities
from cfvalidator.main import EXIT_DATASET_ERROR, EXIT_INVALID, EXIT_VALID, main


@pytest.fixture()
def dataset(tmp_path: Path) -> Path:
    path = tmp_path / "italy_cities.json"
    path.write_text(
        '[{"cod_fisco": "H501", "comune": "Roma"}, {"cod_fisco": "F205", "comune": "Milano"}]',
        encoding="utf-8",
    )
    return path


class TestMain:
    def test_valid_code_from_argument(self, dataset: Path, capsys: pytest.CaptureFixture[str]) -> None:
        status = main(["bncmrc90c15h501w", "--dataset", str(dataset)])
        assert status == EXIT_VALID
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "Code: BNCMRC90C15H501W"
        assert out[1] == "Valid: True"
        assert out[2:] == [
            "- format valid",
            "- month valid: C -> 3",
            "- day valid (male): 15",
            "- municipality code found in dataset: raw=H501, normalized=H501, name=Roma",
            "- check character valid: W",
        ]

    def test_invalid_code(self, dataset: Path, capsys: pytest.CaptureFixture[str]) -> None:
        status = main(["RSSMRA85M01H501Z", "--dataset", str(dataset)])
        assert status == EXIT_INVALID
        out = capsys.readouterr().out
        assert "Valid: False" in out
        assert "- check character mismatch: expected Q, found Z" in out

    def test_wrong_length(self, dataset: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["ABC", "--dataset", str(dataset)]) == EXIT_INVALID
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 3
        assert out[2].startswith("- length invalid")

    def test_code_from_prompt(
        self, dataset: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(builtins, "input", lambda prompt="": "  rssmra85h52f205c  ")
        assert main(["--dataset", str(dataset)]) == EXIT_VALID
        assert "Code: RSSMRA85H52F205C" in capsys.readouterr().out

    def test_prompt_eof(
        self, dataset: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        def _eof(prompt: str = "") -> str:
            raise EOFError

        monkeypatch.setattr(builtins, "input", _eof)
        assert main(["--dataset", str(dataset)]) == EXIT_INVALID

    def test_json_format(self, dataset: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["BNCMRC90C15H501W", "--dataset", str(dataset), "--format", "json"]) == EXIT_VALID

    def test_missing_dataset(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        status = main(["BNCMRC90C15H501W", "--dataset", str(tmp_path / "nope.json")])
        assert status == EXIT_DATASET_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Cannot read municipality dataset" in captured.err

    def test_environment_in_log_event(
        self,
        dataset: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setattr(settings, "environment", "staging")
        monkeypatch.setattr(settings, "log_level", "INFO")
        caplog.set_level(logging.INFO)
        main(["BNCMRC90C15H501W", "--dataset", str(dataset)])
        assert "cf_validated" in caplog.text
        assert "staging" in caplog.text


class TestConfiguredDataset:
    """Without --dataset/--format the CLI uses the cached configured dataset."""

    @pytest.fixture(autouse=True)
    def _configured(self, monkeypatch: pytest.MonkeyPatch, dataset: Path) -> Iterator[None]:
        monkeypatch.setattr(settings.dataset, "municipalities_path", dataset)
        monkeypatch.setattr(settings.dataset, "municipalities_format", "scan")
        get_municipalities.cache_clear()
        yield
        get_municipalities.cache_clear()

    def test_uses_cached_loader(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["BNCMRC90C15H501W"]) == EXIT_VALID
        assert main(["RSSMRA85H52F205C"]) == EXIT_VALID
        info = get_municipalities.cache_info()
        assert info.misses == 1
        assert info.hits == 1
        assert "name=Milano" in capsys.readouterr().out

    def test_missing_configured_dataset(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(settings.dataset, "municipalities_path", tmp_path / "absent.json")
        assert main(["BNCMRC90C15H501W"]) == EXIT_DATASET_ERROR
        assert "Cannot read municipality dataset" in capsys.readouterr().err
