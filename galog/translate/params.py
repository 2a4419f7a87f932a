import logging
from typing import Dict, Iterator, List, Optional, Tuple

from galog.log_codes import PARAM_CAP_REACHED, PARAM_DUPLICATE_DROPPED

from .values import JsonScalar

logger = logging.getLogger(__name__)

ParamEntry = Tuple[str, JsonScalar]


class ParamCollector:
    """
    Ordered, de-duplicated parameters of one event.

    The first value bound to a name wins; later writers are dropped. Only
    property-derived additions count against ``property_cap``.

    Args:
        property_cap: Maximum number of property-derived parameters.
    """

    def __init__(self, property_cap: int):
        self.property_cap = max(property_cap, 0)
        self.property_count = 0
        self._entries: List[ParamEntry] = []
        self._names: Dict[str, int] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[ParamEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def remaining(self) -> int:
        return self.property_cap - self.property_count

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def add(self, name: str, value: JsonScalar) -> bool:
        """
        Add a reserved or global parameter. These are not capped.
        """
        if name in self._names:
            logger.debug(PARAM_DUPLICATE_DROPPED, extra={"param": name})
            return False
        self._names[name] = len(self._entries)
        self._entries.append((name, value))
        return True

    def add_property(self, name: str, value: JsonScalar) -> bool:
        """
        Add a property-derived parameter, unless the cap is exhausted or the
        name is already bound.
        """
        if self.exhausted:
            logger.debug(PARAM_CAP_REACHED, extra={"param": name, "cap": self.property_cap})
            return False
        if not self.add(name, value):
            return False
        self.property_count += 1
        return True

    def get(self, name: str) -> Optional[JsonScalar]:
        index = self._names.get(name)
        if index is None:
            return None
        return self._entries[index][1]

    def as_dict(self) -> Dict[str, JsonScalar]:
        return dict(self._entries)
