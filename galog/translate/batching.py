import logging
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, TypeVar

from galog.constants import DEFAULT_MAX_EVENTS_PER_REQUEST
from galog.log_codes import TRANSLATE_FILTERED, TRANSLATE_MAX_EVENTS_CLAMPED

logger = logging.getLogger(__name__)

T = TypeVar("T")


def filter_events(
    events: Iterable[T], predicate: Optional[Callable[[T], bool]] = None
) -> List[T]:
    """
    Keep the events accepted by ``predicate``, in their original order.

    The predicate is called exactly once per event. Without a predicate
    every event is kept.
    """
    if predicate is None:
        return list(events)

    kept = [event for event in events if predicate(event)]
    logger.debug(TRANSLATE_FILTERED, extra={"kept": len(kept)})
    return kept


def effective_batch_size(max_events: Optional[int]) -> int:
    """
    Clamp a configured per-request event count to a usable value.
    """
    if max_events is None:
        return DEFAULT_MAX_EVENTS_PER_REQUEST
    if max_events < 1:
        logger.warning(TRANSLATE_MAX_EVENTS_CLAMPED, extra={"configured": max_events})
        return 1
    return max_events


def slice_events(events: Sequence[T], max_events: Optional[int]) -> Iterator[List[T]]:
    """
    Split ``events`` into consecutive slices of at most ``max_events``.

    Yields ``ceil(len(events) / max_events)`` slices; only the last one can
    be shorter.
    """
    size = effective_batch_size(max_events)
    for start in range(0, len(events), size):
        yield list(events[start:start + size])
