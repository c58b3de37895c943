class FlashCookieException(Exception):
    pass


class EncodingUnavailable(FlashCookieException):
    """The configured charset cannot percent-encode the flash text."""


class InvalidFlashCookie(FlashCookieException):
    pass


class UnknownFlashLevel(InvalidFlashCookie, LookupError):
    pass


class InvalidCookieName(FlashCookieException, ValueError):
    pass
