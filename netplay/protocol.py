"""Wire format shared with the clients.

A message is a flat list of integers, the first one being the message type,
sent as comma-separated decimal text (``"3,30"`` is PLAY at 30 fps). The
numeric values of :class:`Msg` are not negotiated, so both ends of a
deployment must agree on them.
"""
from enum import IntEnum
from typing import List, Optional, Tuple


class Msg(IntEnum):
    BUTTON_DOWN = 1
    BUTTON_UP = 2
    PLAY = 3
    PAUSE = 4
    MUTE = 5
    UNMUTE = 6
    RELOAD = 7
    CLOSE = 8
    LOAD_FILE = 9
    FILE_LOADED = 10
    REMOTE_CONNECTED = 11
    REMOTE_DISCONNECTED = 12
    CONNECTED = 13
    FRAME = 14


# Rendering of the not-a-number sentinel, matching what browser clients emit
NAN_TOKEN = 'NaN'


def _parse_token(token: str) -> Optional[int]:
    try:
        return int(token.strip())
    except ValueError:
        return None


def encode_message(msg: int, *args) -> str:
    parts = [int(msg)] + list(args)
    return ','.join(NAN_TOKEN if p is None else str(int(p)) for p in parts)


def decode_message(text) -> Tuple[Optional[int], List[Optional[int]]]:
    """Split raw message text into ``(type, args)``.

    Tokens that are not integers come back as ``None``; callers decide what
    a missing number means for them.
    """
    if isinstance(text, bytes):
        text = text.decode('ascii', errors='replace')
    values = [_parse_token(t) for t in str(text).split(',')]
    return values[0], values[1:]


def message_type(value: Optional[int]) -> Optional[Msg]:
    if value is None:
        return None
    try:
        return Msg(value)
    except ValueError:
        return None
