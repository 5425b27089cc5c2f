from qrbits.bitbuffer import (
    MAX_BIT_LENGTH,
    BitBuffer,
    BitBufferError,
    MaximumLengthError,
    NotByteAlignedError,
)
from qrbits.debug import Debug

__all__ = [
    "MAX_BIT_LENGTH",
    "BitBuffer",
    "BitBufferError",
    "MaximumLengthError",
    "NotByteAlignedError",
    "Debug",
]
