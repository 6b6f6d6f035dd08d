import pytest

from vtemu.userinput import UserInput, UserInputState


def feed(user, data, app_mode=False):
    return [user.input(b, app_mode) for b in data]


def test_plain_bytes_pass_through():
    user = UserInput()
    assert "".join(feed(user, b"hello")) == "hello"
    assert user.state is UserInputState.GROUND


def test_cursor_key_translated_without_application_mode():
    user = UserInput()
    assert feed(user, b"\x1bOA") == ["\x1b", "", "[A"]
    assert user.state is UserInputState.GROUND


def test_cursor_key_kept_in_application_mode():
    user = UserInput()
    assert feed(user, b"\x1bOD", app_mode=True) == ["\x1b", "", "OD"]


@pytest.mark.parametrize("key", b"ABCD")
def test_all_cursor_keys_translated(key):
    user = UserInput()
    out = "".join(feed(user, bytes([0x1B, ord("O"), key])))
    assert out == "\x1b[" + chr(key)


def test_non_cursor_ss3_key_unchanged():
    user = UserInput()
    out = "".join(feed(user, b"\x1bOP"))
    assert out == "\x1bOP"


def test_escape_followed_by_other_byte():
    user = UserInput()
    assert feed(user, b"\x1b[") == ["\x1b", "["]
    assert user.state is UserInputState.GROUND


def test_state_tracks_escape_and_ss3():
    user = UserInput()
    user.input(0x1B, False)
    assert user.state is UserInputState.ESC
    user.input(ord("O"), False)
    assert user.state is UserInputState.SS3


def test_equality_follows_state():
    a, b = UserInput(), UserInput()
    assert a == b
    a.input(0x1B, False)
    assert not (a == b)
    b.input(0x1B, False)
    assert a == b


def test_rejects_non_byte():
    with pytest.raises(ValueError):
        UserInput().input(256, False)