"""Unit tests for the console entry point."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pytest

from tabstore.__main__ import build_parser, main


@pytest.fixture
def logging_calls(monkeypatch: pytest.MonkeyPatch) -> list[dict[str, Any]]:
    """Record setup_logging calls instead of reconfiguring structlog globally."""
    calls: list[dict[str, Any]] = []
    monkeypatch.setattr(
        "tabstore.__main__.setup_logging", lambda **kwargs: calls.append(kwargs)
    )
    return calls


@pytest.mark.unit
class TestMain:
    """Tests for argument handling and start-up."""

    def test_parser_defaults(self) -> None:
        args = build_parser().parse_args([])

        assert args.catalog is None
        assert args.log_level is None

    def test_rejects_unknown_log_level(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--log-level", "LOUD"])

    def test_unreadable_catalog_fails(
        self,
        temp_dir: Path,
        logging_calls: list[dict[str, Any]],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert main(["--catalog", str(temp_dir)]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_runs_until_exit(
        self,
        temp_dir: Path,
        logging_calls: list[dict[str, Any]],
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        catalog = temp_dir / "shop.db"
        monkeypatch.setattr("sys.stdin", io.StringIO("showtables\nexit\n"))

        assert main(["--catalog", str(catalog), "--log-level", "DEBUG"]) == 0
        assert "No tables in the database" in capsys.readouterr().out
        assert catalog.exists()
        assert logging_calls[0]["level"] == "DEBUG"
