from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

from galog.cli import cli_app, parse_pair, parse_pairs
from galog.constants import DEBUG_ENDPOINT
from galog.errors import DeliveryError, ServerError


@pytest.mark.unit
class TestParsePair:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("n=3", ("n", 3)),
            ("ok=true", ("ok", True)),
            ("name=ann", ("name", "ann")),
            ('req={"a": 1}', ("req", {"a": 1})),
            ("empty=", ("empty", "")),
            (" spaced =x=y", ("spaced", "x=y")),
        ],
    )
    def test_parses_values(self, raw, expected):
        assert parse_pair(raw) == expected

    @pytest.mark.parametrize("raw", ["novalue", "=1"])
    def test_rejects_malformed_pairs(self, raw):
        with pytest.raises(typer.BadParameter):
            parse_pair(raw)

    def test_parse_pairs(self):
        assert parse_pairs(None) == {}
        assert parse_pairs(["a=1", "a=2", "b=x"]) == {"a": 2, "b": "x"}


@pytest.mark.unit
class TestSendCommand:
    def setup_method(self):
        self.runner = CliRunner()

    def test_dry_run_prints_payload(self):
        result = self.runner.invoke(
            cli_app,
            [
                "send",
                "hello",
                "--level",
                "warning",
                "-p",
                'order={"id": 7}',
                "-g",
                "env=prod",
                "--event-name",
                "app_log",
                "--client-id",
                "cli-client",
                "--dry-run",
            ],
        )

        assert result.exit_code == 0, result.output
        assert '"client_id": "cli-client"' in result.stdout
        assert '"name": "app_log"' in result.stdout
        assert '"message": "hello"' in result.stdout
        assert '"level": "Warning"' in result.stdout
        assert '"env": "prod"' in result.stdout
        assert '"order_id": 7' in result.stdout

    def test_dry_run_without_flattening(self):
        result = self.runner.invoke(
            cli_app,
            ["send", "hi", "-p", "tags=[1, 2]", "--no-flatten", "--client-id", "c", "--dry-run"],
        )

        assert result.exit_code == 0, result.output
        assert '"tags": "[1,2]"' in result.stdout

    def test_missing_credentials_exit_with_configuration_code(self):
        result = self.runner.invoke(cli_app, ["send", "hello"])

        assert result.exit_code == 1

    @patch("galog.cli.GoogleAnalyticsSink")
    def test_send_uses_options(self, mock_sink):
        sink = mock_sink.return_value.__enter__.return_value
        sink.emit_batch.return_value = 1
        sink.client_id = "cid"

        result = self.runner.invoke(
            cli_app,
            ["send", "hello", "--measurement-id", "G-1", "--api-secret", "s", "--validate"],
        )

        assert result.exit_code == 0, result.output
        assert "Sent 1 payload(s)" in result.stdout
        options = mock_sink.call_args.args[0]
        assert options.measurement_id == "G-1"
        assert options.api_secret == "s"
        assert options.endpoint == DEBUG_ENDPOINT
        (events,) = sink.emit_batch.call_args.args
        assert events[0].message == "hello"

    @patch("galog.cli.GoogleAnalyticsSink")
    def test_reads_credentials_from_environment(self, mock_sink, monkeypatch):
        monkeypatch.setenv("GALOG_MEASUREMENT_ID", "G-ENV")
        monkeypatch.setenv("GALOG_API_SECRET", "env-secret")
        sink = mock_sink.return_value.__enter__.return_value
        sink.emit_batch.return_value = 1
        sink.client_id = "cid"

        result = self.runner.invoke(cli_app, ["send", "hello"])

        assert result.exit_code == 0, result.output
        options = mock_sink.call_args.args[0]
        assert options.measurement_id == "G-ENV"
        assert options.api_secret == "env-secret"

    @patch("galog.cli.GoogleAnalyticsSink")
    def test_delivery_failure_exit_code(self, mock_sink):
        sink = mock_sink.return_value.__enter__.return_value
        sink.emit_batch.side_effect = DeliveryError([(0, ServerError())], 1)

        result = self.runner.invoke(
            cli_app, ["send", "hello", "--measurement-id", "G-1", "--api-secret", "s"]
        )

        assert result.exit_code == 2

    def test_invalid_timeout_exit_code(self, monkeypatch):
        monkeypatch.setenv("GALOG_REQUEST_TIMEOUT", "-1")

        result = self.runner.invoke(cli_app, ["send", "hello", "--dry-run"])

        assert result.exit_code == 1


@pytest.mark.unit
@patch("galog.cli.get_version", return_value="0.3.0")
def test_version_command(_mock_get_version):
    result = CliRunner().invoke(cli_app, ["version"])

    assert result.exit_code == 0
    assert "0.3.0" in result.stdout
