"""
Cookie flash messages.

A flash is a short message that survives exactly one redirect. It travels
to the browser in a single cookie whose value is

    <percent-encoded text>/<LEVEL NAME>

and is read back and cleared on the next request, see `flashcookie.reader`.
"""

import codecs
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Mapping, Optional, Tuple, Union
from urllib.parse import quote_plus

from starlette.background import BackgroundTask
from starlette.datastructures import URL
from starlette.responses import RedirectResponse, Response

from flashcookie.conf import settings
from flashcookie.exceptions import EncodingUnavailable
from flashcookie.levels import FlashLevel
from flashcookie.utils import check_cookie_name

logger = logging.getLogger(__name__)

SEPARATOR = "/"


def http_date(dt: datetime) -> str:
    """
    Formats a datetime as an RFC 1123 HTTP date, e.g.
    `Sun, 18 Oct 2026 19:30:00 GMT`.

    Day and month names are always English regardless of the host locale.
    Naive datetimes are taken as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


def quote_text(text: str, charset: Optional[str] = None) -> str:
    charset = charset or settings.FLASH_CHARSET
    try:
        codecs.lookup(charset)
        return quote_plus(text, encoding=charset)
    except (LookupError, UnicodeEncodeError) as exc:
        raise EncodingUnavailable(
            f"Can't encode flash message with charset {charset!r}"
        ) from exc


@dataclass(frozen=True)
class SetCookie:
    """A `Set-Cookie` instruction waiting to be merged into a response."""

    name: str
    value: str
    attributes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        check_cookie_name(self.name)

    def header_value(self) -> str:
        return "; ".join((f"{self.name}={self.value}",) + tuple(self.attributes))

    def apply(self, response: Response) -> Response:
        response.raw_headers.append(
            (b"set-cookie", self.header_value().encode("latin-1"))
        )
        return response


@dataclass(frozen=True)
class FlashMessage:
    """
    A one-time message and its severity.

    Two flashes are equal when their text and level are; the cookie name
    only decides where the flash is stored.
    """

    text: str
    level: FlashLevel = FlashLevel.INFO
    cookie_name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.level, str):
            object.__setattr__(self, "level", FlashLevel.from_name(self.level))
        if self.cookie_name is None:
            object.__setattr__(self, "cookie_name", settings.FLASH_COOKIE_NAME)
        check_cookie_name(self.cookie_name)  # type: ignore[arg-type]

    def __str__(self) -> str:
        return f"{self.level.name}{SEPARATOR}{self.text}"

    @classmethod
    def from_message(
        cls,
        text: str,
        level: Union[FlashLevel, str] = FlashLevel.INFO,
        cookie_name: Optional[str] = None,
    ) -> "FlashMessage":
        """
        Creates a flash from a plain message.

        Args:
            text: The message to show on the next request.
            level: Severity, `INFO` by default.
            cookie_name: Cookie to store it in, the configured
                `FLASH_COOKIE_NAME` by default.

        Raises:
            InvalidCookieName: `cookie_name` is not a valid cookie name.
        """
        return cls(text, level, cookie_name)

    @classmethod
    def from_error(
        cls,
        error: BaseException,
        level: Union[FlashLevel, str] = FlashLevel.SEVERE,
        cookie_name: Optional[str] = None,
    ) -> "FlashMessage":
        """
        Creates a flash from an exception, `SEVERE` unless told otherwise.

        The text is the exception message, or its class name when the
        exception has no message.
        """
        return cls(str(error) or type(error).__name__, level, cookie_name)

    def to_cookie(self, now: Optional[datetime] = None) -> SetCookie:
        """
        Encodes the flash as a cookie instruction.

        The cookie is scoped to `Path=/` and expires `FLASH_LIFETIME_SECONDS`
        (one hour by default) after `now`, which defaults to the current time.

        Raises:
            EncodingUnavailable: The configured charset can't encode the text.
        """
        if now is None:
            now = datetime.now(timezone.utc)
        value = SEPARATOR.join((quote_text(self.text), self.level.name))
        expires = now + timedelta(seconds=settings.FLASH_LIFETIME_SECONDS)
        logger.debug(
            "Encoded %s flash into cookie %s", self.level.name, self.cookie_name
        )
        return SetCookie(
            name=self.cookie_name,  # type: ignore[arg-type]
            value=value,
            attributes=("Path=/", f"Expires={http_date(expires)}"),
        )


def encode(flash: FlashMessage, now: Optional[datetime] = None) -> SetCookie:
    return flash.to_cookie(now)


def with_flash(response: Response, flash: FlashMessage) -> Response:
    """Attaches the flash cookie to `response` and returns it."""
    return flash.to_cookie().apply(response)


class FlashRedirectResponse(RedirectResponse):
    """A redirect that carries a flash to the page it points at."""

    def __init__(
        self,
        url: Union[str, URL],
        flash: FlashMessage,
        status_code: int = 303,
        headers: Optional[Mapping[str, str]] = None,
        background: Optional[BackgroundTask] = None,
    ) -> None:
        super().__init__(url, status_code, headers, background)
        self.flash = flash
        flash.to_cookie().apply(self)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.flash})"
