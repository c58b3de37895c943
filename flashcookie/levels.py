import logging
from enum import Enum

from flashcookie.exceptions import UnknownFlashLevel


class FlashLevel(Enum):
    """
    Severity tags carried by a flash message.

    The member name is what goes on the wire, the value is the matching
    standard `logging` level so a reader can log the flash at its severity.
    """

    SEVERE = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO
    CONFIG = 15
    FINE = logging.DEBUG
    FINER = 5
    FINEST = 1

    @classmethod
    def from_name(cls, name: str) -> "FlashLevel":
        """
        Looks a level up by its serialized name.

        Matching is case-insensitive, and the Python logging names
        `CRITICAL`, `ERROR` and `DEBUG` are accepted as aliases.

        Raises:
            UnknownFlashLevel: No level has that name.
        """
        key = name.strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise UnknownFlashLevel(f"Unknown flash level {name!r}") from None

    @property
    def logging_level(self) -> int:
        return self.value

    @property
    def css_class(self) -> str:
        return _CSS_CLASSES.get(self, "secondary")


_ALIASES = {
    "CRITICAL": "SEVERE",
    "ERROR": "SEVERE",
    "DEBUG": "FINE",
}

_CSS_CLASSES = {
    FlashLevel.SEVERE: "danger",
    FlashLevel.WARNING: "warning",
    FlashLevel.INFO: "primary",
}
