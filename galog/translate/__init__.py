import logging
from typing import Iterable, List, Optional

from galog.config import SinkOptions
from galog.events import Event
from galog.log_codes import TRANSLATE_NOTHING_TO_SEND, TRANSLATE_SLICED

from .batching import effective_batch_size, filter_events, slice_events
from .encoder import PayloadEncoder
from .flatten import PropertyFlattener
from .names import NameSanitizer
from .params import ParamCollector, ParamEntry
from .values import MappedValue, ValueMapper

logger = logging.getLogger(__name__)


def translate(
    events: Iterable[Event],
    options: SinkOptions,
    encoder: Optional[PayloadEncoder] = None,
) -> List[str]:
    """
    Translate events into Measurement Protocol request bodies, one per slice.

    Events rejected by ``options.include_predicate`` are dropped; the rest
    are split into slices of at most ``options.max_events_per_request``.

    Returns:
        The JSON payloads, in slice order. Empty when nothing passed the filter.
    """
    kept = filter_events(events, options.include_predicate)
    if not kept:
        logger.debug(TRANSLATE_NOTHING_TO_SEND)
        return []

    encoder = encoder or PayloadEncoder(options)
    payloads = [encoder.encode(chunk) for chunk in slice_events(kept, options.max_events_per_request)]
    logger.debug(TRANSLATE_SLICED, extra={"events": len(kept), "payloads": len(payloads)})
    return payloads


__all__ = [
    "MappedValue",
    "NameSanitizer",
    "ParamCollector",
    "ParamEntry",
    "PayloadEncoder",
    "PropertyFlattener",
    "ValueMapper",
    "effective_batch_size",
    "filter_events",
    "slice_events",
    "translate",
]
