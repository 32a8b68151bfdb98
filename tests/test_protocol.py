from netplay.protocol import Msg, decode_message, encode_message, message_type


def test_play_round_trip():
    msg, args = decode_message(encode_message(Msg.PLAY, 30))
    assert msg == Msg.PLAY
    assert args == [30]


def test_encode_is_comma_separated_decimal():
    assert encode_message(Msg.CONNECTED, 7, 2) == f"{int(Msg.CONNECTED)},7,2"
    assert encode_message(Msg.PAUSE) == str(int(Msg.PAUSE))


def test_decode_signed_and_padded_tokens():
    msg, args = decode_message('1, -5 ,+3')
    assert msg == 1
    assert args == [-5, 3]


def test_non_numeric_tokens_become_none():
    msg, args = decode_message('9,abc,')
    assert msg == Msg.LOAD_FILE
    assert args == [None, None]


def test_none_encodes_as_nan():
    assert encode_message(Msg.LOAD_FILE, None) == f"{int(Msg.LOAD_FILE)},NaN"


def test_decode_accepts_bytes():
    assert decode_message(b'4') == (4, [])


def test_message_type_catalog_is_sequential():
    assert [int(m) for m in Msg] == list(range(1, 15))
    assert message_type(3) is Msg.PLAY
    assert message_type(99) is None
    assert message_type(None) is None
