import logging
import os
from typing import Any, Callable, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from galog.constants import (
    DEFAULT_BATCH_SIZE_LIMIT,
    DEFAULT_ENDPOINT,
    DEFAULT_FLATTEN_SEPARATOR,
    DEFAULT_FLUSH_PERIOD,
    DEFAULT_MAX_EVENTS_PER_REQUEST,
    DEFAULT_MAX_PARAM_NAME_LENGTH,
    DEFAULT_MAX_PARAM_VALUE_LENGTH,
    DEFAULT_MAX_PROPERTY_PARAMS_PER_EVENT,
    DEFAULT_RETRY_COUNT,
    ENV_API_SECRET,
    ENV_CLIENT_ID,
    ENV_ENDPOINT,
    ENV_MEASUREMENT_ID,
    ENV_REQUEST_TIMEOUT,
    MIN_PARAM_NAME_LENGTH,
    REQUEST_TIMEOUT,
)
from galog.events import Event

logger = logging.getLogger(__name__)


class SinkOptions(BaseModel):
    """
    Settings of a Google Analytics sink. Read-only once built; use
    ``model_copy(update=...)`` to derive a variant.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Identity
    measurement_id: Optional[str] = None
    api_secret: Optional[str] = None
    client_id: Optional[str] = None

    # Caller-supplied functions
    event_name_resolver: Optional[Callable[[Event], Optional[str]]] = None
    include_predicate: Optional[Callable[[Event], bool]] = None
    property_name_formatter: Optional[Callable[[str], Optional[str]]] = None
    included_property_names: Optional[FrozenSet[str]] = None

    # Behaviour
    include_exception_details: bool = True
    non_personalized_ads: bool = False
    map_level_to_param: bool = True
    include_log_event_properties: bool = False
    flatten_structured_properties: bool = True
    flatten_separator: str = DEFAULT_FLATTEN_SEPARATOR
    global_params: Dict[str, Any] = Field(default_factory=dict)

    # Limits
    max_events_per_request: int = DEFAULT_MAX_EVENTS_PER_REQUEST
    max_param_value_length: int = Field(default=DEFAULT_MAX_PARAM_VALUE_LENGTH, ge=1)
    max_param_name_length: int = Field(
        default=DEFAULT_MAX_PARAM_NAME_LENGTH, ge=MIN_PARAM_NAME_LENGTH
    )
    max_property_params_per_event: int = Field(
        default=DEFAULT_MAX_PROPERTY_PARAMS_PER_EVENT, ge=0
    )

    # Transport
    endpoint: str = DEFAULT_ENDPOINT
    request_timeout: float = Field(default=REQUEST_TIMEOUT, gt=0)

    # Batching host
    flush_period: float = Field(default=DEFAULT_FLUSH_PERIOD, gt=0)
    batch_size_limit: int = Field(default=DEFAULT_BATCH_SIZE_LIMIT, ge=1)
    retry_count: int = Field(default=DEFAULT_RETRY_COUNT, ge=0)

    @field_validator("included_property_names", mode="before")
    @classmethod
    def _as_frozenset(cls, value: Any) -> Any:
        if value is None or isinstance(value, frozenset):
            return value
        if isinstance(value, str):
            return frozenset([value])
        return frozenset(value)

    @field_validator("flatten_separator", mode="before")
    @classmethod
    def _separator_default(cls, value: Any) -> Any:
        if value is None:
            return DEFAULT_FLATTEN_SEPARATOR
        return value

    @classmethod
    def from_env(cls, **overrides: Any) -> "SinkOptions":
        """
        Build options from ``GALOG_*`` environment variables.

        Explicit ``overrides`` win over the environment; ``None`` overrides
        are ignored so CLI defaults do not mask the environment.
        """
        values: Dict[str, Any] = {}
        env_map = {
            "measurement_id": ENV_MEASUREMENT_ID,
            "api_secret": ENV_API_SECRET,
            "client_id": ENV_CLIENT_ID,
            "endpoint": ENV_ENDPOINT,
            "request_timeout": ENV_REQUEST_TIMEOUT,
        }
        for field_name, env_name in env_map.items():
            raw = os.environ.get(env_name)
            if raw is not None and raw.strip():
                values[field_name] = raw.strip()

        values.update({k: v for k, v in overrides.items() if v is not None})
        logger.debug("Sink options loaded from environment: %s", sorted(values))
        return cls(**values)
