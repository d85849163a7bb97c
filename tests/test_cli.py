"""Tests for rikishidata.cli."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from rikishidata.cli import main
from rikishidata.models import RikishiRecord
from rikishidata.util import PatternMismatchError


class TestMain:
    @patch("rikishidata.cli.fetch_rikishi")
    def test_writes_csv_for_each_rid(self, mock_fetch: MagicMock, tmp_path: Path) -> None:
        mock_fetch.side_effect = lambda rid, **kwargs: RikishiRecord(rid=rid, shikona="x")
        out = tmp_path / "out.csv"

        main(["12370", "11980", "--output", str(out), "--raw-cache", "off"])

        assert mock_fetch.call_count == 2
        lines = out.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        assert lines[1].startswith("11980,")

    @patch("rikishidata.cli.fetch_rikishi")
    def test_settings_from_args(self, mock_fetch: MagicMock, tmp_path: Path) -> None:
        mock_fetch.return_value = RikishiRecord(rid=1)

        main([
            "1", "--output", str(tmp_path / "out.csv"), "--raw-cache", "off",
            "--base-url", "http://localhost:8000", "--timeout", "5",
        ])

        settings = mock_fetch.call_args.kwargs["settings"]
        assert settings.base_url == "http://localhost:8000"
        assert settings.timeout == 5
        assert mock_fetch.call_args.kwargs["cache_path"] is None

    @patch("rikishidata.cli.fetch_rikishi")
    def test_fatal_error_exits_1(self, mock_fetch: MagicMock, tmp_path: Path) -> None:
        mock_fetch.side_effect = PatternMismatchError(
            "unable to match birth date.", label="Birth Date", value="x", rid=1,
        )
        out = tmp_path / "out.csv"

        with pytest.raises(SystemExit) as exc:
            main(["1", "--output", str(out), "--raw-cache", "off"])
        assert exc.value.code == 1
        assert not out.exists()

    def test_rejects_non_positive_rid(self) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["0"])
        assert exc.value.code == 2
