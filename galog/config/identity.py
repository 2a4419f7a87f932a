"""Client identity resolution for the Measurement Protocol."""

from __future__ import annotations

import logging
import os
import platform
import uuid
from typing import Optional

from galog.constants import CLIENT_ID_MAX_LENGTH, ENV_CLIENT_ID, ENV_API_SECRET, ENV_MEASUREMENT_ID
from galog.errors import ConfigurationError
from galog.log_codes import IDENTITY_CLIENT_ID_RESOLVED, IDENTITY_MACHINE_ID_UNAVAILABLE
from galog.utils.machine_id import get_machine_id

logger = logging.getLogger(__name__)

CLIENT_ID_NAMESPACE = uuid.UUID("6f3b7c52-2d7e-4b8e-9b1a-4c6f0e3a9d21")


def _validate_identifier(value: Optional[str]) -> Optional[str]:
    """
    Strip whitespace and validate a candidate identifier.

    Returns:
        The stripped value if valid, or None.
    """
    if value is None:
        return None

    value = value.strip()

    if not value or len(value) > CLIENT_ID_MAX_LENGTH:
        return None

    return value


def require_credential(value: Optional[str], field: str, env_name: str) -> str:
    """
    Fail fast when a credential needed to build the endpoint is missing.

    Raises:
        ConfigurationError: If the value is missing or blank.
    """
    if value is None or not value.strip():
        raise ConfigurationError(
            field=field,
            message=f"Invalid sink configuration: {{field}} is required (option or {env_name}).",
        )
    return value.strip()


def require_measurement_id(value: Optional[str]) -> str:
    return require_credential(value, "measurement_id", ENV_MEASUREMENT_ID)


def require_api_secret(value: Optional[str]) -> str:
    return require_credential(value, "api_secret", ENV_API_SECRET)


def stable_client_id(source: str) -> str:
    """
    Derive a client id from a local identifier without leaking it.
    """
    return str(uuid.uuid5(CLIENT_ID_NAMESPACE, source))


def resolve_client_id(override: Optional[str] = None) -> str:
    """
    Resolve the client identity.

    Resolution order:
        1. Explicit value from the options
        2. ``GALOG_CLIENT_ID`` environment variable
        3. Platform machine id, hashed
        4. Host name, hashed

    Returns:
        A non-empty client id. Never fails.
    """
    validated = _validate_identifier(override)
    if validated:
        return validated

    validated = _validate_identifier(os.environ.get(ENV_CLIENT_ID))
    if validated:
        logger.debug(IDENTITY_CLIENT_ID_RESOLVED, extra={"source": "environment"})
        return validated

    try:
        machine_id = _validate_identifier(get_machine_id())
    except (OSError, ValueError):
        logger.debug(IDENTITY_MACHINE_ID_UNAVAILABLE, exc_info=True)
        machine_id = None

    if machine_id:
        logger.debug(IDENTITY_CLIENT_ID_RESOLVED, extra={"source": "machine_id"})
        return stable_client_id(machine_id)

    logger.debug(IDENTITY_CLIENT_ID_RESOLVED, extra={"source": "hostname"})
    return stable_client_id(platform.node() or "localhost")
