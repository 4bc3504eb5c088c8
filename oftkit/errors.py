"""Error codes raised by OFT operations."""

from __future__ import annotations

from enum import IntEnum

_ERROR_CODE_OFFSET = 6000


class OFTErrorCode(IntEnum):
    """Program error codes, numbered from the custom-error offset."""

    Unauthorized = _ERROR_CODE_OFFSET
    InvalidSender = _ERROR_CODE_OFFSET + 1
    InvalidDecimals = _ERROR_CODE_OFFSET + 2
    SlippageExceeded = _ERROR_CODE_OFFSET + 3
    InvalidTokenDest = _ERROR_CODE_OFFSET + 4
    RateLimitExceeded = _ERROR_CODE_OFFSET + 5
    InvalidFee = _ERROR_CODE_OFFSET + 6
    InvalidMintAuthority = _ERROR_CODE_OFFSET + 7
    Paused = _ERROR_CODE_OFFSET + 8


class OFTError(Exception):
    """An OFT operation was rejected; ``code`` says why."""

    def __init__(self, code: OFTErrorCode, message: str | None = None) -> None:
        self.code = OFTErrorCode(code)
        self.message = message if message is not None else self.code.name
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"OFTError({self.code.name}, {self.message!r})"