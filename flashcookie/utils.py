from http.cookies import CookieError, Morsel

from flashcookie.exceptions import InvalidCookieName


def check_cookie_name(name: str) -> str:
    """Returns `name` if it can be used as a cookie name in a header."""
    try:
        Morsel().set(name, "", "")
    except CookieError as exc:
        raise InvalidCookieName(f"Invalid cookie name {name!r}") from exc
    return name
