from typing import Callable, Optional

from galog.constants import (
    INVALID_PARAM_CHARS,
    PARAM_NAME_PLACEHOLDER,
    PARAM_NAME_PREFIX,
)

NameFormatter = Callable[[str], Optional[str]]


def _is_ascii_letter(char: str) -> bool:
    return char.isascii() and char.isalpha()


class NameSanitizer:
    """
    Normalize free-form property names into Measurement Protocol parameter
    names: ``^[A-Za-z][A-Za-z0-9_]*$``, at most ``max_length`` characters.

    Args:
        max_length: Maximum parameter name length.
        formatter: Optional mapping applied to the raw name first. A blank
            result falls back to the raw name.
    """

    def __init__(self, max_length: int, formatter: Optional[NameFormatter] = None):
        self.max_length = max_length
        self.formatter = formatter

    def sanitize(self, raw: Optional[str]) -> str:
        name = raw or ""

        if self.formatter is not None:
            formatted = self.formatter(name)
            if formatted is not None and formatted.strip():
                name = formatted

        if not name.strip():
            name = PARAM_NAME_PLACEHOLDER

        if not _is_ascii_letter(name[0]):
            name = PARAM_NAME_PREFIX + name

        name = INVALID_PARAM_CHARS.sub("_", name)

        return name[: self.max_length]

    __call__ = sanitize
