# -*- coding: utf-8 -*-

__author__ = """galog contributors"""

from galog.config import SinkOptions
from galog.errors import ConfigurationError, DeliveryError, GalogError, TransportError
from galog.events import (
    DictionaryValue,
    ErrorInfo,
    Event,
    LogLevel,
    ScalarValue,
    SequenceValue,
    StructureValue,
    to_property_value,
)
from galog.sink import GoogleAnalyticsSink
from galog.translate import translate

__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "DictionaryValue",
    "ErrorInfo",
    "Event",
    "GalogError",
    "GoogleAnalyticsSink",
    "LogLevel",
    "ScalarValue",
    "SequenceValue",
    "SinkOptions",
    "StructureValue",
    "TransportError",
    "to_property_value",
    "translate",
]
