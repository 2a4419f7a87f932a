"""
Payload encoding for the GA4 Measurement Protocol.

One payload carries one slice of events:

    {
      "client_id": "...",
      "non_personalized_ads": true,      # only when enabled
      "events": [{"name": "...", "params": {...}}, ...]
    }

Parameters of each event are collected first as ordered ``(name, value)``
pairs, then serialized in one pass.
"""

import json
import logging
from typing import Any, Dict, List, Sequence

from galog.config import SinkOptions, resolve_client_id
from galog.constants import (
    DEFAULT_EVENT_NAME,
    MAX_EVENT_NAME_LENGTH,
    PARAM_EXCEPTION_MESSAGE,
    PARAM_EXCEPTION_TYPE,
    PARAM_LEVEL,
    PARAM_MESSAGE,
    PARAM_TIMESTAMP,
    PAYLOAD_CLIENT_ID,
    PAYLOAD_EVENT_NAME,
    PAYLOAD_EVENT_PARAMS,
    PAYLOAD_EVENTS,
    PAYLOAD_NON_PERSONALIZED_ADS,
    RESERVED_PARAMS,
)
from galog.events import Event
from galog.events.types import format_timestamp
from galog.log_codes import EVENT_NAME_FALLBACK

from .flatten import PropertyFlattener
from .names import NameSanitizer
from .params import ParamCollector
from .values import ValueMapper

logger = logging.getLogger(__name__)


class PayloadEncoder:
    """
    Encode slices of events into JSON request bodies.

    Stateless across calls; one encoder can be shared between threads.

    Args:
        options: Sink options. A missing ``client_id`` is resolved once, here.
    """

    def __init__(self, options: SinkOptions):
        self.options = options
        self.client_id = resolve_client_id(options.client_id)
        self.mapper = ValueMapper(options.max_param_value_length)
        self.sanitizer = NameSanitizer(
            options.max_param_name_length, options.property_name_formatter
        )
        # Global names are not run through the property formatter
        self.global_sanitizer = NameSanitizer(options.max_param_name_length)
        self.reserved = {name: self.global_sanitizer.sanitize(name) for name in RESERVED_PARAMS}
        self.flattener = PropertyFlattener(
            sanitizer=self.sanitizer,
            mapper=self.mapper,
            enabled=options.flatten_structured_properties,
            separator=options.flatten_separator,
            included_names=options.included_property_names,
        )

    def resolve_event_name(self, event: Event) -> str:
        resolver = self.options.event_name_resolver
        if resolver is None:
            return DEFAULT_EVENT_NAME

        resolved = resolver(event)
        name = "" if resolved is None else str(resolved)
        if not name.strip():
            logger.debug(EVENT_NAME_FALLBACK, extra={"resolved": resolved})
            return DEFAULT_EVENT_NAME
        return name[:MAX_EVENT_NAME_LENGTH]

    def collect_params(self, event: Event) -> ParamCollector:
        """
        Build the ordered parameters of one event: message, level,
        timestamp, exception details, global parameters, then properties.
        """
        options = self.options
        params = ParamCollector(options.max_property_params_per_event)

        params.add(self.reserved[PARAM_MESSAGE], self.mapper.text(event.message or ""))
        if options.map_level_to_param:
            params.add(self.reserved[PARAM_LEVEL], self.mapper.text(_level_text(event.level)))
        params.add(self.reserved[PARAM_TIMESTAMP], self.mapper.text(format_timestamp(event.timestamp)))

        if options.include_exception_details and event.error is not None:
            params.add(self.reserved[PARAM_EXCEPTION_TYPE], self.mapper.text(event.error.type_name or ""))
            params.add(self.reserved[PARAM_EXCEPTION_MESSAGE], self.mapper.text(event.error.message or ""))

        for key, raw in options.global_params.items():
            mapped = self.mapper.map(raw)
            if mapped.is_null:
                continue
            params.add(self.global_sanitizer.sanitize(key), mapped.value)

        if options.include_log_event_properties:
            self.flattener.flatten_properties(event.properties, params)

        return params

    def encode_event(self, event: Event) -> Dict[str, Any]:
        return {
            PAYLOAD_EVENT_NAME: self.resolve_event_name(event),
            PAYLOAD_EVENT_PARAMS: self.collect_params(event).as_dict(),
        }

    def build_document(self, events: Sequence[Event]) -> Dict[str, Any]:
        if not events:
            raise ValueError("Cannot encode an empty slice of events")

        document: Dict[str, Any] = {PAYLOAD_CLIENT_ID: self.client_id}
        if self.options.non_personalized_ads:
            document[PAYLOAD_NON_PERSONALIZED_ADS] = True

        encoded: List[Dict[str, Any]] = [self.encode_event(event) for event in events]
        document[PAYLOAD_EVENTS] = encoded
        return document

    def encode(self, events: Sequence[Event]) -> str:
        """
        Encode one slice into its JSON request body.

        Raises:
            ValueError: If ``events`` is empty.
        """
        # ASCII output keeps lone surrogates encodable as \uXXXX escapes
        return json.dumps(self.build_document(events))


def _level_text(level: Any) -> str:
    return getattr(level, "value", None) or str(level)
