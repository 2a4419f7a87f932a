"""
Distribution metadata attached to Measurement Protocol requests.
"""

from importlib.metadata import PackageNotFoundError, version
import logging
import platform
from typing import Dict, List, Optional

import httpx

from galog.constants import CONTENT_TYPE_JSON

LOG = logging.getLogger(__name__)

DISTRIBUTION = "galog"


def get_version() -> Optional[str]:
    """
    Installed version of galog, or None when running from a source tree.
    """
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        LOG.debug("%s is not installed as a distribution", DISTRIBUTION)
        return None


def _host_token() -> str:
    system = platform.system() or "unknown"
    release = platform.release()
    return f"{system}/{release}" if release else system


def get_user_agent() -> str:
    """
    Product tokens of galog, its HTTP client, the interpreter and the host,
    e.g. ``galog/0.3.0 httpx/0.27.0 CPython/3.12.1 Linux/6.8.0``.
    """
    tokens: List[str] = [
        f"{DISTRIBUTION}/{get_version() or 'dev'}",
        f"httpx/{httpx.__version__}",
        f"{platform.python_implementation()}/{platform.python_version()}",
        _host_token(),
    ]
    return " ".join(tokens)


def get_meta_http_headers() -> Dict[str, str]:
    """
    Default headers of every collection request. The validation endpoint
    answers in JSON, so it is the only accepted media type.
    """
    return {
        "User-Agent": get_user_agent(),
        "Accept": CONTENT_TYPE_JSON,
    }
