import logging

import pytest
from starlette.responses import Response

from flashcookie.exceptions import InvalidFlashCookie, UnknownFlashLevel
from flashcookie.flash import FlashMessage
from flashcookie.levels import FlashLevel
from flashcookie.reader import clear_flash, decode, get_flash, read_flash


def test_decode_example():
    text, level = decode("can%27t+save+your+post%2C+sorry/SEVERE")

    assert text == "can't save your post, sorry"
    assert level is FlashLevel.SEVERE


def test_decode_splits_on_first_separator():
    assert decode("a%2Fb/INFO") == ("a/b", FlashLevel.INFO)

    with pytest.raises(UnknownFlashLevel):
        decode("a/b/INFO")


@pytest.mark.parametrize(
    "text",
    ["", "100% sure + done", "a/b/c", "héllo wörld", "日本語 ✓", "tab\tand\nnewline"],
)
def test_encoded_value_decodes_back(text):
    flash = FlashMessage(text, FlashLevel.WARNING)

    assert decode(flash.to_cookie().value) == (text, FlashLevel.WARNING)


def test_decode_rejects_malformed_values():
    with pytest.raises(InvalidFlashCookie):
        decode("no-separator")

    with pytest.raises(InvalidFlashCookie):
        decode("%FF/INFO")


def test_read_flash(make_request):
    request = make_request("other=1; RsFlash=thanks+for+the+post/INFO")

    flash = read_flash(request)

    assert flash == FlashMessage("thanks for the post", FlashLevel.INFO)
    assert flash.cookie_name == "RsFlash"


def test_read_flash_custom_cookie(make_request):
    request = make_request("Notice=done/FINE")

    assert read_flash(request) is None
    assert read_flash(request, "Notice") == FlashMessage("done", FlashLevel.FINE)


def test_read_flash_malformed(make_request, caplog):
    request = make_request("RsFlash=garbage")

    with caplog.at_level(logging.WARNING, logger="flashcookie.reader"):
        assert read_flash(request) is None

    assert "malformed flash cookie RsFlash" in caplog.text


def test_get_flash_without_middleware(make_request):
    assert get_flash(make_request()) is None


def test_clear_flash():
    response = Response("ok")

    assert clear_flash(response) is response
    assert response.headers["set-cookie"] == (
        "RsFlash=; Path=/; Expires=Thu, 01 Jan 1970 00:00:00 GMT; Max-Age=0"
    )
