import logging
import os
from typing import Any, Dict

from rich.console import Console
from rich.theme import Theme

LOG = logging.getLogger(__name__)

GALOG_THEME = {
    "title": "bold default on default",
    "param_name": "bold cyan on default",
    "number": "bold cyan on default",
    "success": "bold green on default",
    "error": "bold red on default",
    "tip": "bold default on default",
}

non_interactive = os.getenv("NON_INTERACTIVE") == "1"

console_kwargs: Dict[str, Any] = {
    "theme": Theme(GALOG_THEME, inherit=True),
}

if non_interactive:
    LOG.info(
        "NON_INTERACTIVE environment variable is set, forcing non-interactive mode"
    )
    console_kwargs["force_terminal"] = True
    console_kwargs["force_interactive"] = False

main_console = Console(**console_kwargs)
error_console = Console(stderr=True, **console_kwargs)
