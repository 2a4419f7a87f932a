# -*- coding: utf-8 -*-
import re

# Measurement Protocol endpoint
DEFAULT_ENDPOINT = "https://www.google-analytics.com/mp/collect"
DEBUG_ENDPOINT = "https://www.google-analytics.com/debug/mp/collect"
CONTENT_TYPE_JSON = "application/json"
REQUEST_TIMEOUT = 10.0

# GA4 accepts at most 25 events per request, keep some headroom
DEFAULT_MAX_EVENTS_PER_REQUEST = 20
DEFAULT_MAX_PARAM_VALUE_LENGTH = 300
# GA4 event parameter names are limited to 40 characters
DEFAULT_MAX_PARAM_NAME_LENGTH = 40
DEFAULT_MAX_PROPERTY_PARAMS_PER_EVENT = 10
DEFAULT_FLATTEN_SEPARATOR = "_"

# Batching host
DEFAULT_FLUSH_PERIOD = 5.0
DEFAULT_BATCH_SIZE_LIMIT = 40
DEFAULT_RETRY_COUNT = 2
DEFAULT_MAX_QUEUE_SIZE = 10000

DEFAULT_EVENT_NAME = "log_event"
# GA rejects longer event names
MAX_EVENT_NAME_LENGTH = 40

# Parameter naming
PARAM_NAME_PLACEHOLDER = "p"
PARAM_NAME_PREFIX = "p_"
DICTIONARY_KEY_PLACEHOLDER = "key"
PARAM_NAME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
INVALID_PARAM_CHARS = re.compile(r"[^A-Za-z0-9_]")

MAX_FLATTEN_DEPTH = 16

# Reserved parameters, always written before anything event-derived
PARAM_MESSAGE = "message"
PARAM_LEVEL = "level"
PARAM_TIMESTAMP = "timestamp"
PARAM_EXCEPTION_TYPE = "exception_type"
PARAM_EXCEPTION_MESSAGE = "exception_message"
RESERVED_PARAMS = (
    PARAM_MESSAGE,
    PARAM_LEVEL,
    PARAM_TIMESTAMP,
    PARAM_EXCEPTION_TYPE,
    PARAM_EXCEPTION_MESSAGE,
)
# Shorter name limits would truncate reserved names into each other
MIN_PARAM_NAME_LENGTH = max(len(name) for name in RESERVED_PARAMS)

# Payload document keys
PAYLOAD_CLIENT_ID = "client_id"
PAYLOAD_NON_PERSONALIZED_ADS = "non_personalized_ads"
PAYLOAD_EVENTS = "events"
PAYLOAD_EVENT_NAME = "name"
PAYLOAD_EVENT_PARAMS = "params"

# Environment
ENV_MEASUREMENT_ID = "GALOG_MEASUREMENT_ID"
ENV_API_SECRET = "GALOG_API_SECRET"
ENV_CLIENT_ID = "GALOG_CLIENT_ID"
ENV_ENDPOINT = "GALOG_ENDPOINT"
ENV_REQUEST_TIMEOUT = "GALOG_REQUEST_TIMEOUT"

CLIENT_ID_MAX_LENGTH = 256

# Exit codes
EXIT_CODE_OK = 0
EXIT_CODE_CONFIGURATION_ERROR = 1
EXIT_CODE_DELIVERY_ERROR = 2
