from flashcookie.flash import (
    FlashMessage,
    FlashRedirectResponse,
    SetCookie,
    encode,
    with_flash,
)
from flashcookie.levels import FlashLevel
from flashcookie.reader import (
    FlashMiddleware,
    clear_flash,
    decode,
    get_flash,
    read_flash,
)

__version__ = "0.1.0"

__all__ = [
    "FlashLevel",
    "FlashMessage",
    "FlashMiddleware",
    "FlashRedirectResponse",
    "SetCookie",
    "clear_flash",
    "decode",
    "encode",
    "get_flash",
    "read_flash",
    "with_flash",
]
