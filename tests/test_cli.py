"""Tests for CLI commands.

Parser tests verify command registration; main() tests run commands against
a mocked API.
"""

import json

import pytest
import responses
from fixtures import BASE_URL, DIFF_URL, SUGGEST_URL

from zenmoney_sync.runner.main import create_cli, main, parse_timestamp
from zenmoney_sync.schemas import EntityType


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "zenmoney.yaml"
    path.write_text(
        "token: cli-token\n"
        "client:\n"
        f"  base_url: {BASE_URL}\n"
        "  retry_attempts: 0\n"
        "  retry_wait_time: 0\n"
    )
    return path


class TestCLICommandRegistry:
    """Tests for CLI command registration."""

    def test_all_commands_registered(self):
        parser = create_cli()

        subparsers_action = None
        for action in parser._actions:
            if action.dest == "command":
                subparsers_action = action
                break

        assert subparsers_action is not None
        commands = list(subparsers_action.choices.keys())
        for name in ("init", "full", "since", "force", "suggest"):
            assert name in commands

    def test_force_parses_entity_types(self):
        args = create_cli().parse_args(["force", "account", "reminderMarker"])

        assert args.entities == [EntityType.ACCOUNT, EntityType.REMINDER_MARKER]

    def test_force_rejects_unknown_entity(self):
        with pytest.raises(SystemExit):
            create_cli().parse_args(["force", "spaceship"])

    def test_since_accepts_iso_date(self):
        args = create_cli().parse_args(["since", "2024-01-01T00:00:00+00:00"])

        assert args.timestamp == 1704067200

    def test_parse_timestamp_epoch(self):
        assert parse_timestamp("1642300700") == 1642300700

    def test_json_flag(self):
        args = create_cli().parse_args(["full", "--json"])

        assert args.json is True


class TestMain:
    """End-to-end command runs."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_init_writes_config(self, tmp_path):
        path = tmp_path / "zenmoney.yaml"

        assert main(["-c", str(path), "init"]) == 0
        assert path.exists()
        # Second run refuses to overwrite
        assert main(["-c", str(path), "init"]) == 1

    def test_missing_token(self, tmp_path, capsys):
        assert main(["-c", str(tmp_path / "absent.yaml"), "full"]) == 1
        assert "token is required" in capsys.readouterr().err

    def test_malformed_client_section_reported(self, tmp_path, capsys):
        path = tmp_path / "zenmoney.yaml"
        path.write_text("token: abc\nclient:\n  - base_url\n")

        assert main(["-c", str(path), "full"]) == 1
        assert "must be a mapping" in capsys.readouterr().err

    @responses.activate
    def test_full_sync_prints_counts(self, config_file, full_sync_response, capsys):
        responses.add(responses.POST, DIFF_URL, json=full_sync_response, status=200)

        assert main(["-c", str(config_file), "full"]) == 0

        out = capsys.readouterr().out
        assert "Server timestamp: 1700000000" in out
        assert "account" in out
        assert responses.calls[0].request.headers["Authorization"] == "Bearer cli-token"

    @responses.activate
    def test_since_json_output(self, config_file, instrument_response, capsys):
        responses.add(responses.POST, DIFF_URL, json=instrument_response, status=200)

        assert main(["-c", str(config_file), "since", "1642300700", "--json"]) == 0

        printed = json.loads(capsys.readouterr().out)
        assert printed["serverTimestamp"] == 1642300800
        assert printed["instrument"][0]["shortTitle"] == "USD"
        assert json.loads(responses.calls[0].request.body)["serverTimestamp"] == 1642300700

    @responses.activate
    def test_force_sends_entities(self, config_file):
        responses.add(responses.POST, DIFF_URL, json={"serverTimestamp": 1}, status=200)

        assert main(["-c", str(config_file), "force", "budget", "merchant"]) == 0

        body = json.loads(responses.calls[0].request.body)
        assert body["forceFetch"] == ["budget", "merchant"]

    @responses.activate
    def test_suggest_batch(self, config_file, capsys):
        responses.add(
            responses.POST,
            SUGGEST_URL,
            json=[
                {"payee": "McDonalds", "merchant": "mcdonalds-1", "tag": ["food"]},
                {"payee": "Starbucks", "merchant": None, "tag": None},
            ],
            status=200,
        )

        assert main(["-c", str(config_file), "suggest", "McDonalds", "Starbucks"]) == 0

        out = capsys.readouterr().out
        assert "McDonalds: merchant=mcdonalds-1 tags=food" in out
        assert "Starbucks: merchant=- tags=-" in out

    @responses.activate
    def test_server_error_reported(self, config_file, capsys):
        responses.add(responses.POST, DIFF_URL, status=500)

        assert main(["-c", str(config_file), "full"]) == 1

        err = capsys.readouterr().err
        assert "ZenMoney returned an error" in err
        assert "SERVER_ERROR" in err
