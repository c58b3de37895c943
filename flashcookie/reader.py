import logging
from datetime import datetime, timezone
from typing import Optional, Tuple
from urllib.parse import unquote_plus

from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from flashcookie.conf import settings
from flashcookie.exceptions import InvalidFlashCookie
from flashcookie.flash import SEPARATOR, FlashMessage, SetCookie, http_date
from flashcookie.levels import FlashLevel
from flashcookie.utils import check_cookie_name

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def decode(value: str, charset: Optional[str] = None) -> Tuple[str, FlashLevel]:
    """
    Splits a flash cookie value into its text and level.

    The value is cut at the first `/`: the text is percent-encoded so it
    never contains a raw separator, and level names never do either.

    Raises:
        InvalidFlashCookie: The value is not a flash cookie.
    """
    encoded, sep, name = value.partition(SEPARATOR)
    if not sep:
        raise InvalidFlashCookie(f"Missing level in flash cookie {value!r}")
    level = FlashLevel.from_name(name)
    try:
        text = unquote_plus(
            encoded, encoding=charset or settings.FLASH_CHARSET, errors="strict"
        )
    except (LookupError, UnicodeDecodeError) as exc:
        raise InvalidFlashCookie(f"Can't decode flash text {encoded!r}") from exc
    return text, level


def clearing_cookie(cookie_name: Optional[str] = None) -> SetCookie:
    return SetCookie(
        name=cookie_name or settings.FLASH_COOKIE_NAME,
        value="",
        attributes=("Path=/", f"Expires={http_date(_EPOCH)}", "Max-Age=0"),
    )


def read_flash(
    conn: HTTPConnection, cookie_name: Optional[str] = None
) -> Optional[FlashMessage]:
    """
    Returns the flash sent with the request, or `None`.

    A malformed cookie is logged and treated as no flash at all.
    """
    cookie_name = cookie_name or settings.FLASH_COOKIE_NAME
    value = conn.cookies.get(cookie_name)
    if value is None:
        return None

    try:
        text, level = decode(value)
    except InvalidFlashCookie:
        logger.warning("Ignoring malformed flash cookie %s", cookie_name, exc_info=True)
        return None
    return FlashMessage(text, level, cookie_name)


def clear_flash(response: Response, cookie_name: Optional[str] = None) -> Response:
    """Expires the flash cookie so the message is not shown again."""
    return clearing_cookie(cookie_name).apply(response)


def get_flash(conn: HTTPConnection) -> Optional[FlashMessage]:
    """Returns the flash decoded by `FlashMiddleware` for this request."""
    return conn.scope.get("flash")


def _sets_cookie(headers: MutableHeaders, cookie_name: str) -> bool:
    for value in headers.getlist("set-cookie"):
        if value.split("=", 1)[0].strip() == cookie_name:
            return True
    return False


class FlashMiddleware:
    """
    Reads the flash cookie into `scope["flash"]` and clears it on the way out.

    If the endpoint sets a new flash under the same cookie name, that one is
    kept and nothing is cleared.
    """

    def __init__(
        self, app: ASGIApp, cookie_name: Optional[str] = None, log: bool = True
    ) -> None:
        if cookie_name is not None:
            check_cookie_name(cookie_name)
        self.app = app
        self.cookie_name = cookie_name
        self.log = log

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        cookie_name = self.cookie_name or settings.FLASH_COOKIE_NAME
        connection = HTTPConnection(scope)
        received = cookie_name in connection.cookies
        flash = read_flash(connection, cookie_name) if received else None
        scope["flash"] = flash

        if flash is not None and self.log:
            logger.log(flash.level.logging_level, "Flash %s", flash)

        async def send_wrapper(message: Message) -> None:
            if received and message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                if not _sets_cookie(headers, cookie_name):
                    headers.append(
                        "Set-Cookie", clearing_cookie(cookie_name).header_value()
                    )
            await send(message)

        await self.app(scope, receive, send_wrapper)
