from typing import Optional

import typer

from flashcookie.exceptions import FlashCookieException
from flashcookie.flash import FlashMessage
from flashcookie.reader import decode as decode_value

app = typer.Typer()


@app.command()
def encode(
    text: str,
    level: str = typer.Option("INFO", help="Severity name, e.g. SEVERE."),
    cookie_name: Optional[str] = typer.Option(None, help="Cookie to store it in."),
) -> None:
    """
    print the Set-Cookie header for a flash message
    """
    try:
        cookie = FlashMessage.from_message(text, level, cookie_name).to_cookie()
    except FlashCookieException as e:
        print(f"error: {e}")
        raise typer.Exit(code=1)
    print(f"Set-Cookie: {cookie.header_value()}")


@app.command()
def decode(value: str) -> None:
    """
    decode a flash cookie value
    """
    try:
        text, level = decode_value(value)
    except FlashCookieException as e:
        print(f"error: {e}")
        raise typer.Exit(code=1)
    print(f"{level.name}/{text}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
