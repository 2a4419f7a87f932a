import json
import logging
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, List, Optional, Tuple

import typer
from pydantic import ValidationError
from rich.markup import escape

from galog.config import SinkOptions
from galog.console import error_console, main_console as console
from galog.constants import DEBUG_ENDPOINT, EXIT_CODE_CONFIGURATION_ERROR
from galog.errors import GalogError
from galog.events import Event, LogLevel, to_property_value
from galog.meta import get_version
from galog.sink import GoogleAnalyticsSink
from galog.translate import translate

LOG = logging.getLogger(__name__)

cli_app = typer.Typer(
    name="galog",
    help="Send structured log events to Google Analytics 4.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def configure_logger(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.CRITICAL
    logging.basicConfig(format="%(asctime)s %(name)s => %(message)s", level=level)


def parse_pair(raw: str) -> Tuple[str, Any]:
    """
    Parse ``key=value``. Values are read as JSON when possible, so
    ``n=3`` is a number and ``req={"a": 1}`` a structure; anything else is
    kept as text.
    """
    key, sep, value = raw.partition("=")
    if not sep or not key.strip():
        raise typer.BadParameter(f"Expected key=value, got {raw!r}")
    try:
        return key.strip(), json.loads(value)
    except ValueError:
        return key.strip(), value


def parse_pairs(values: Optional[List[str]]) -> Dict[str, Any]:
    return dict(parse_pair(raw) for raw in values or [])


@cli_app.callback()
def main(
    debug: Annotated[
        bool, typer.Option("--debug", help="Enable debug logging.")
    ] = False,
) -> None:
    configure_logger(debug)


@cli_app.command("send")
def send(
    message: Annotated[str, typer.Argument(help="Rendered message of the event.")],
    level: Annotated[
        LogLevel, typer.Option("--level", "-l", case_sensitive=False)
    ] = LogLevel.INFORMATION,
    properties: Annotated[
        Optional[List[str]],
        typer.Option("--property", "-p", help="Event property as key=value. Repeatable."),
    ] = None,
    global_params: Annotated[
        Optional[List[str]],
        typer.Option("--global", "-g", help="Global parameter as key=value. Repeatable."),
    ] = None,
    event_name: Annotated[
        Optional[str], typer.Option("--event-name", help="Event name sent to GA.")
    ] = None,
    measurement_id: Annotated[
        Optional[str], typer.Option("--measurement-id", help="Overrides GALOG_MEASUREMENT_ID.")
    ] = None,
    api_secret: Annotated[
        Optional[str], typer.Option("--api-secret", help="Overrides GALOG_API_SECRET.")
    ] = None,
    client_id: Annotated[
        Optional[str], typer.Option("--client-id", help="Overrides GALOG_CLIENT_ID.")
    ] = None,
    flatten: Annotated[
        bool, typer.Option("--flatten/--no-flatten", help="Flatten nested properties.")
    ] = True,
    validate: Annotated[
        bool, typer.Option("--validate", help="Use the GA validation endpoint.")
    ] = False,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Print the payloads without sending them.")
    ] = False,
) -> None:
    """
    Send a single event, or print its payload with [bold]--dry-run[/bold].
    """
    overrides: Dict[str, Any] = {
        "measurement_id": measurement_id,
        "api_secret": api_secret,
        "client_id": client_id,
        "global_params": parse_pairs(global_params),
        "include_log_event_properties": True,
        "flatten_structured_properties": flatten,
    }
    if event_name:
        overrides["event_name_resolver"] = lambda _event: event_name
    if validate:
        overrides["endpoint"] = DEBUG_ENDPOINT

    try:
        options = SinkOptions.from_env(**overrides)
    except ValidationError as e:
        error_console.print(f"[error]Invalid sink configuration[/error]\n{escape(str(e))}")
        raise typer.Exit(code=EXIT_CODE_CONFIGURATION_ERROR)

    event = Event(
        timestamp=datetime.now(timezone.utc),
        level=level,
        message=message,
        properties={k: to_property_value(v) for k, v in parse_pairs(properties).items()},
    )

    if dry_run:
        for payload in translate([event], options):
            console.print_json(payload)
        return

    try:
        with GoogleAnalyticsSink(options) as sink:
            sent = sink.emit_batch([event])
    except GalogError as e:
        LOG.debug("Send failed", exc_info=True)
        error_console.print(f"[error]{escape(e.message)}[/error]")
        raise typer.Exit(code=e.get_exit_code())

    console.print(f"[success]Sent {sent} payload(s)[/success] as client [tip]{sink.client_id}[/tip]")


@cli_app.command("version")
def version() -> None:
    """
    Print the galog version.
    """
    current = get_version()
    if current is None:
        error_console.print("[error]galog is not installed as a distribution[/error]")
        raise typer.Exit(code=EXIT_CODE_CONFIGURATION_ERROR)
    console.print(current)


def cli(prog_name: str = "galog") -> None:
    cli_app(prog_name=prog_name)
