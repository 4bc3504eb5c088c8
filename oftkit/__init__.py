"""Omnichain fungible token accounting: codecs, fees, rate limits, sends and admin operations."""

__version__ = "0.1.0"

__all__ = [
    "admin",
    "compose_msg_codec",
    "errors",
    "events",
    "fees",
    "initialize",
    "msg_codec",
    "quote",
    "send",
    "state",
    "tokens",
]