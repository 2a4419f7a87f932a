import logging
from typing import Mapping, Optional

from galog.constants import DICTIONARY_KEY_PLACEHOLDER, MAX_FLATTEN_DEPTH
from galog.events.types import PropertyKind, PropertyValue, scalar_text
from galog.log_codes import PARAM_DEPTH_LIMIT

from .names import NameSanitizer
from .params import ParamCollector
from .values import ValueMapper

logger = logging.getLogger(__name__)


class PropertyFlattener:
    """
    Expand event properties into flat, named parameters.

    Nested structures, dictionaries and sequences are either walked (child
    names are joined with ``separator``) or rendered as one text parameter,
    depending on ``enabled``. Names are sanitized when they are added, so
    composed names are always valid.

    Args:
        sanitizer: Parameter name sanitizer.
        mapper: Scalar value mapper.
        enabled: Walk nested values instead of rendering them.
        separator: Joins parent and child names.
        included_names: When set, only these top-level property names are used.
        max_depth: Nesting level at which descent stops.
    """

    def __init__(
        self,
        sanitizer: NameSanitizer,
        mapper: ValueMapper,
        enabled: bool = True,
        separator: str = "_",
        included_names: Optional[frozenset] = None,
        max_depth: int = MAX_FLATTEN_DEPTH,
    ):
        self.sanitizer = sanitizer
        self.mapper = mapper
        self.enabled = enabled
        self.separator = separator
        self.included_names = included_names
        self.max_depth = max_depth

    def flatten_properties(
        self, properties: Mapping[str, PropertyValue], collector: ParamCollector
    ) -> None:
        for name, value in properties.items():
            if collector.exhausted:
                return
            if self.included_names is not None and name not in self.included_names:
                continue
            self.flatten(name, value, collector)

    def flatten(
        self,
        name: str,
        value: PropertyValue,
        collector: ParamCollector,
        depth: int = 0,
    ) -> None:
        if collector.exhausted:
            return

        kind = value.kind

        if kind is PropertyKind.SCALAR:
            self._add(name, value.value, collector)
            return

        if not self.enabled:
            self._add(name, value.render(), collector)
            return

        if depth >= self.max_depth:
            logger.debug(PARAM_DEPTH_LIMIT, extra={"param": name, "depth": depth})
            return

        if kind is PropertyKind.STRUCTURE:
            children = ((field_name, child) for field_name, child in value.fields)
        elif kind is PropertyKind.DICTIONARY:
            children = (
                (scalar_text(key) or DICTIONARY_KEY_PLACEHOLDER, child)
                for key, child in value.entries
            )
        elif kind is PropertyKind.SEQUENCE:
            children = ((str(index), child) for index, child in enumerate(value.items))
        else:
            raise ValueError(f"Unknown property kind: {kind!r}")

        for child_name, child in children:
            if collector.exhausted:
                return
            self.flatten(self._join(name, child_name), child, collector, depth + 1)
            if collector.exhausted:
                return

    def _join(self, parent: str, child: str) -> str:
        return f"{parent}{self.separator}{child}"

    def _add(self, name: str, raw, collector: ParamCollector) -> None:
        mapped = self.mapper.map(raw)
        if mapped.is_null:
            return
        collector.add_property(self.sanitizer.sanitize(name), mapped.value)
