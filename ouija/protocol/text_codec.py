"""
Text codecs for frame payloads.

Two payload encodings are in use by device firmware:

1. **Alphabet index codec** (``encode_text`` / ``decode_text``): each
   character becomes a single index byte.
   - Digits '0'-'9' map to 0x00-0x09
   - The 33 uppercase letters of ALPHABET map to 0x0A-0x2A in order
   - Lower-case input is upper-cased before lookup

2. **Uppercase ASCII** (``encode_ascii``): text is upper-cased and sent as
   plain 7-bit ASCII bytes.

Both codecs reject what they cannot represent instead of substituting.
"""

from __future__ import annotations

from typing import Final, Sequence

from ouija.exceptions import InvalidByteValue, UnsupportedCharacter

ALPHABET: Final[str] = "АБВГДЕЁЖЗИЙКЛМНОПРСТУФХЦЧШЩЪЫЬЭЮЯ"
"""Letters supported by the index codec, in code order."""

DIGITS: Final[str] = "0123456789"

LETTER_OFFSET: Final[int] = 0x0A
"""Code of the first alphabet letter."""

HIGHEST_CODE: Final[int] = LETTER_OFFSET + len(ALPHABET) - 1
"""Largest byte the index codec produces (0x2A)."""

# Pre-computed lookup tables for fast encoding/decoding
_DECODE_TABLE: Final[str] = DIGITS + ALPHABET
_ENCODE_TABLE: Final[dict[str, int]] = {ch: code for code, ch in enumerate(_DECODE_TABLE)}


def _upper(character: str) -> str:
    # str.upper() may expand one character into several (e.g. 'ß' -> 'SS');
    # such characters are never representable, so keep the original.
    upper = character.upper()
    return upper if len(upper) == 1 else character


def encode_text(text: str | None) -> bytes:
    """
    Encode digits and alphabet letters as index bytes.

    Args:
        text: Input text; None and "" produce an empty result.

    Returns:
        One byte per input character.

    Raises:
        UnsupportedCharacter: If a character is neither a digit nor a letter
            of ALPHABET (after upper-casing).

    Example:
        >>> encode_text("123абв")
        b'\\x01\\x02\\x03\\n\\x0b\\x0c'
    """
    if not text:
        return b""

    result = bytearray(len(text))
    for position, character in enumerate(text):
        upper = _upper(character)
        code = _ENCODE_TABLE.get(upper)
        if code is None:
            raise UnsupportedCharacter(
                upper,
                position,
                f"Unsupported character {upper!r} at position {position}; "
                "only digits 0-9 and letters of the device alphabet are supported",
            )
        result[position] = code
    return bytes(result)


def decode_text(data: bytes | bytearray | Sequence[int] | None) -> str:
    """
    Decode index bytes back into upper-case text.

    Args:
        data: Encoded bytes; None and b"" produce an empty string.

    Returns:
        Decoded text.

    Raises:
        InvalidByteValue: If a value is outside 0..HIGHEST_CODE.

    Example:
        >>> decode_text(bytes([0x01, 0x0A]))
        '1А'
    """
    if not data:
        return ""

    characters = []
    for position, value in enumerate(data):
        if not 0 <= value <= HIGHEST_CODE:
            raise InvalidByteValue(value, position, HIGHEST_CODE)
        characters.append(_DECODE_TABLE[value])
    return "".join(characters)


def encode_ascii(text: str | None) -> bytes:
    """
    Upper-case text and encode it as ASCII bytes.

    Args:
        text: Input text; None and "" produce an empty result.

    Returns:
        ASCII bytes of the upper-cased text.

    Raises:
        UnsupportedCharacter: If a character has no ASCII representation.

    Example:
        >>> encode_ascii("hello 42")
        b'HELLO 42'
    """
    if not text:
        return b""

    result = bytearray(len(text))
    for position, character in enumerate(text):
        upper = _upper(character)
        if ord(upper) > 0x7F:
            raise UnsupportedCharacter(
                upper,
                position,
                f"Unsupported character {upper!r} at position {position}; "
                "ASCII payloads accept 7-bit characters only",
            )
        result[position] = ord(upper)
    return bytes(result)
