"""Unit tests for CLI argument parsing and command output."""
from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from wallet_sections.cli import build_parser, load_state_file, main


class TestBuildParser:
    def test_sections_command(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["sections", "state.yaml"])
        assert args.command == "sections"
        assert args.state == "state.yaml"
        assert args.preload is False

    def test_brief_command_with_preload(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["brief", "state.json", "--preload"])
        assert args.command == "brief"
        assert args.preload is True

    def test_config_flag(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["--config", "/tmp/c.yaml", "brief", "s.yaml"])
        assert args.config == "/tmp/c.yaml"

    def test_log_level_flag(self) -> None:
        parser = build_parser()
        args = parser.parse_args(["--log-level", "DEBUG", "brief", "s.yaml"])
        assert args.log_level == "DEBUG"

    def test_no_command(self) -> None:
        parser = build_parser()
        args = parser.parse_args([])
        assert args.command is None

    def test_state_required(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["sections"])


class TestLoadStateFile:
    def test_reads_json(self, tmp_path: Path) -> None:
        state_file = tmp_path / "state.json"
        state_file.write_text(json.dumps({"nativeCurrency": "USD"}))
        assert load_state_file(state_file) == {"nativeCurrency": "USD"}

    def test_rejects_non_mapping(self, tmp_path: Path) -> None:
        state_file = tmp_path / "state.yaml"
        state_file.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="mapping"):
            load_state_file(state_file)


class TestMain:
    def test_no_command_exits(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    def test_brief_prints_cells(
        self,
        sample_state_path: Path,
        sample_yaml_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        # The sample config enables HTTP preload; keep the run offline.
        with patch("wallet_sections.cli.HttpImagePreloader") as http_sink:
            main(["--config", str(sample_yaml_path), "brief", str(sample_state_path)])

        cells = json.loads(capsys.readouterr().out)
        assert [c["uid"] for c in cells] == [
            "assets-header",
            "coin-uni",
            "coin-eth",
            "savings-header",
            "savings-0xcdai",
            "pools-header",
            "pool-0xpool1",
            "nfts-header",
            "family-0xpunks",
            "nft-0xpunks-punk-1",
        ]
        assert cells[0]["type"] == "ASSETS_HEADER"
        assert cells[0]["value"] == "$4,750.75"
        http_sink.return_value.preload.assert_called_once()

    def test_sections_prints_json(
        self, sample_state_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        main(["sections", str(sample_state_path)])

        payload = json.loads(capsys.readouterr().out)
        assert payload["is_empty"] is False
        names = [s["name"] for s in payload["sections"]]
        assert names == ["balances", "pools", "collectibles"]
        assert payload["sections"][0]["flags"] == ["balances"]
        assert payload["sections"][2]["flags"] == ["big", "collectibles"]

    def test_preload_fetches_images_before_exit(
        self, sample_state_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        mock_response = AsyncMock()
        mock_response.status = 200
        mock_response.read = AsyncMock(return_value=b"\x89PNG")
        mock_response.__aenter__ = AsyncMock(return_value=mock_response)
        mock_response.__aexit__ = AsyncMock(return_value=None)

        mock_session = AsyncMock()
        mock_session.get = MagicMock(return_value=mock_response)
        mock_session.__aenter__ = AsyncMock(return_value=mock_session)
        mock_session.__aexit__ = AsyncMock(return_value=None)

        with patch("wallet_sections.preload.sink.aiohttp.ClientSession", return_value=mock_session):
            with patch("wallet_sections.preload.sink.aiohttp.TCPConnector"):
                main(["brief", str(sample_state_path), "--preload"])

        fetched = [call.args[0] for call in mock_session.get.call_args_list]
        assert fetched == ["https://img.example.com/punk-1.png"]
        assert json.loads(capsys.readouterr().out)[0]["uid"] == "assets-header"
