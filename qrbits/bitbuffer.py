import sys
from array import array
from typing import Iterator, Sequence

from bitarray import bitarray

from qrbits.debug import Debug

WORD_BITS = 32
WORD_MASK = 0xFFFFFFFF
INITIAL_WORDS = 64  # 2048 bits

# Bit lengths are bounded by a signed 32-bit index.
MAX_BIT_LENGTH = 2**31 - 1

_WORD_TYPECODE = "I"


class BitBufferError(Exception):
    pass


class NotByteAlignedError(BitBufferError):
    pass


class MaximumLengthError(BitBufferError):
    pass


class BitBuffer:
    """
    An append-only sequence of bits packed MSB-first into 32-bit words.

    Bit i lives in word i // 32 at position 31 - i % 32, so the words read in
    order form one big-endian bitstream. Every bit at or past bit_length is
    zero.
    """

    def __init__(self):
        self._data = array(_WORD_TYPECODE, [0]) * INITIAL_WORDS
        self._bit_length = 0

    @property
    def bit_length(self) -> int:
        return self._bit_length

    @property
    def capacity(self) -> int:
        """
        Number of bits the current storage can hold without growing.
        """
        return len(self._data) * WORD_BITS

    def __len__(self) -> int:
        return self._bit_length

    def __iter__(self) -> Iterator[int]:
        for index in range(self._bit_length):
            yield self.get_bit(index)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BitBuffer):
            return NotImplemented
        return (
            self._bit_length == other._bit_length
            and self._packed() == other._packed()
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"BitBuffer('{self.to_bitarray().to01()}')"

    def get_bit(self, index: int) -> int:
        """
        Return the bit (0 or 1) at the given index.
        """
        if index < 0 or index >= self._bit_length:
            raise IndexError(f"Bit index {index} out of range")
        return (self._data[index >> 5] >> (31 - (index & 0x1F))) & 1

    def get_bytes(self) -> bytes:
        """
        Return the bits packed into bytes in big endian. The bit length must
        be a multiple of 8.
        """
        if self._bit_length % 8 != 0:
            raise NotByteAlignedError("Data is not a whole number of bytes")
        return self._packed()[: self._bit_length // 8]

    def to_bitarray(self) -> bitarray:
        """
        Return a new big-endian bitarray holding exactly the written bits.
        """
        bits = bitarray(endian="big")
        bits.frombytes(self._packed())
        del bits[self._bit_length :]
        return bits

    def append_bits(self, value: int, length: int) -> None:
        """
        Append the given number of low-order bits of value.
        Requires 0 <= length <= 31 and 0 <= value < 2**length.
        """
        if length < 0 or length > 31 or value < 0 or value >> length != 0:
            raise ValueError("Value out of range")
        if length > MAX_BIT_LENGTH - self._bit_length:
            raise MaximumLengthError("Maximum length reached")
        if length == 0:
            return

        self._ensure_capacity(self._bit_length + length)

        remain = WORD_BITS - (self._bit_length & 0x1F)
        if remain < length:
            # high bits finish the current word, the rest start the next one
            self._data[self._bit_length >> 5] |= value >> (length - remain)
            self._bit_length += remain
            length -= remain
            value &= (1 << length) - 1
            remain = WORD_BITS
        self._data[self._bit_length >> 5] |= value << (remain - length)
        self._bit_length += length

    def append_words(self, words: Sequence[int], length: int) -> None:
        """
        Append the first length bits of words, each word read MSB first.
        Requires 0 <= length <= 32 * len(words). If length is not a multiple
        of 32, the unused low bits of the last word read must be zero.
        """
        if length < 0 or length > len(words) * WORD_BITS:
            raise ValueError("Value out of range")
        if length == 0:
            return

        whole_words = length // WORD_BITS
        tail_bits = length % WORD_BITS
        used_words = whole_words + (1 if tail_bits > 0 else 0)
        for word in words[:used_words]:
            if word < 0 or word > WORD_MASK:
                raise ValueError("Word out of range")
        if tail_bits > 0 and (words[whole_words] << tail_bits) & WORD_MASK != 0:
            raise ValueError("Last word must have low bits clear")
        if length > MAX_BIT_LENGTH - self._bit_length:
            raise MaximumLengthError("Maximum length reached")

        self._ensure_capacity(self._bit_length + length)

        shift = self._bit_length % WORD_BITS
        if shift == 0:
            start = self._bit_length >> 5
            self._data[start : start + used_words] = array(
                _WORD_TYPECODE, words[:used_words]
            )
            self._bit_length += length
            return

        for word in words[:whole_words]:
            self._data[self._bit_length >> 5] |= word >> shift
            self._bit_length += WORD_BITS
            self._data[self._bit_length >> 5] = (word << (WORD_BITS - shift)) & WORD_MASK
        if tail_bits > 0:
            self.append_bits(words[whole_words] >> (WORD_BITS - tail_bits), tail_bits)

    def append_bitarray(self, bits: bitarray) -> None:
        """
        Append every bit of bits in its logical order.
        """
        # big endian copy so tobytes() packs the first bit into the MSB
        data = bitarray(bits.to01(), endian="big").tobytes()
        data += bytes(-len(data) % 4)
        words = array(_WORD_TYPECODE)
        words.frombytes(data)
        if sys.byteorder == "little":
            words.byteswap()
        self.append_words(words, len(bits))

    def _packed(self) -> bytes:
        # big endian bytes of every word holding written bits
        words = self._data[: (self._bit_length + 31) >> 5]
        if sys.byteorder == "little":
            words.byteswap()
        return words.tobytes()

    def _ensure_capacity(self, required_bits: int) -> None:
        old_words = len(self._data)
        new_words = old_words
        while required_bits > new_words * WORD_BITS:
            new_words *= 2
        if new_words == old_words:
            return

        Debug.log(f"Growing storage from {old_words} to {new_words} words")
        grown = array(_WORD_TYPECODE, self._data)
        grown.extend(array(_WORD_TYPECODE, [0]) * (new_words - old_words))
        self._data = grown
