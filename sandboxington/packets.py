"""Packet identifiers and shared game constants."""

import logging
from enum import IntEnum

GAME_TITLE = "Sandboxington"

UPS = 25
"""World updates per second."""

LOGGER = logging.getLogger("sandboxington")


class ServerPacket(IntEnum):
    """Headers of packets sent by the server."""

    CONFIRM_AUTH = 0
    DENY_AUTH = 1
    PLAYER_JOIN = 2
    PLAYER_LEAVE = 3
    PLAYER_DATA = 5
    CHUNK_DATA = 6
    CHAT_MESSAGE = 8
    PLAYER_MOVE = 9
    SET_BLOCK = 10


class ClientPacket(IntEnum):
    """Headers of packets sent by a client."""

    AUTHENTICATE = 0
    CLIENT_MOVE = 1
    SET_BLOCK = 2


class Identifier(IntEnum):
    """Who a message refers to."""

    SYSTEM = 0
    YOU = 1
    PLAYER = 2