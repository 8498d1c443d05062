"""Tests for frame encoding."""

import pytest

from ouija.exceptions import PayloadTooLarge, UnsupportedCharacter
from ouija.models.records import Command, PayloadEncoding
from ouija.protocol.checksums import calculate_checksum
from ouija.protocol.constants import CommandType
from ouija.protocol.encoder import FrameEncoder, build_frame, encode_payload


class TestEncodePayload:
    """Tests for payload encoding strategies."""

    def test_none_is_empty(self):
        """Test missing message gives empty payload."""
        assert encode_payload(None) == b""

    def test_bytes_are_verbatim(self):
        """Test pre-encoded bytes pass through regardless of encoding."""
        raw = bytes([0xFF, 0x00, 0x41])
        assert encode_payload(raw, PayloadEncoding.ALPHABET) == raw
        assert encode_payload(bytearray(raw), PayloadEncoding.ASCII) == raw

    def test_ascii_strategy(self):
        """Test ASCII strategy upper-cases text."""
        assert encode_payload("yes", PayloadEncoding.ASCII) == b"YES"

    def test_alphabet_strategy(self):
        """Test alphabet strategy produces index codes."""
        assert encode_payload("1а", PayloadEncoding.ALPHABET) == bytes([0x01, 0x0A])

    def test_strategies_differ(self):
        """Test the two strategies are not conflated."""
        assert encode_payload("12", PayloadEncoding.ASCII) == b"12"
        assert encode_payload("12", PayloadEncoding.ALPHABET) == b"\x01\x02"


class TestBuildFrame:
    """Tests for build_frame."""

    def test_empty_payload(self):
        """Test header-only frame."""
        assert build_frame(0x04) == bytes([0xAA, 0x55, 0x01, 0x04, 0x00, 0x05])

    def test_max_payload(self):
        """Test 255-byte payload is accepted."""
        frame = build_frame(0x01, bytes(255))
        assert len(frame) == 261
        assert frame[4] == 255

    def test_payload_too_large(self):
        """Test 256-byte payload is rejected."""
        with pytest.raises(PayloadTooLarge) as exc_info:
            build_frame(0x01, bytes(256))
        assert exc_info.value.length == 256
        assert exc_info.value.limit == 255

    def test_command_type_out_of_range(self):
        """Test command type must fit in a byte."""
        with pytest.raises(ValueError):
            build_frame(0x100)


class TestFrameEncoder:
    """Tests for FrameEncoder."""

    @pytest.fixture
    def encoder(self):
        """Create a FrameEncoder instance."""
        return FrameEncoder()

    def test_yes_without_message(self, encoder):
        """Test the yes command produces AA 55 01 04 00 05."""
        frame = encoder.encode(Command(command_type=0x04, message=None))
        assert frame == bytes([0xAA, 0x55, 0x01, 0x04, 0x00, 0x05])

    def test_play_once_with_raw_payload(self, encoder):
        """Test play-once with a pre-encoded payload."""
        payload = bytes([0x01, 0x02, 0x03, 0x0A, 0x0B, 0x0C])
        frame = encoder.encode(Command(command_type=0x01, message=payload))

        assert len(frame) == 12
        assert frame[:5] == bytes([0xAA, 0x55, 0x01, 0x01, 0x06])
        assert frame[5:11] == payload
        assert frame[-1] == calculate_checksum(frame[:-1])
        assert frame[-1] == 0xF4

    def test_play_once_with_alphabet_text(self, encoder):
        """Test text encoded with the alphabet codec matches raw bytes."""
        from_text = encoder.encode(
            Command(command_type=CommandType.PLAY_ONCE, message="123абв", encoding=PayloadEncoding.ALPHABET)
        )
        from_bytes = encoder.encode(
            Command(command_type=CommandType.PLAY_ONCE, message=bytes([0x01, 0x02, 0x03, 0x0A, 0x0B, 0x0C]))
        )
        assert from_text == from_bytes

    def test_ascii_text(self, encoder):
        """Test default ASCII encoding of text."""
        frame = encoder.encode(Command(command_type=CommandType.PLAY_REPEAT, message="ab"))
        assert frame[3] == 0x02
        assert frame[4] == 2
        assert frame[5:7] == b"AB"

    def test_oversized_payload(self, encoder):
        """Test 300-byte payload fails with PayloadTooLarge."""
        with pytest.raises(PayloadTooLarge):
            encoder.encode(Command(command_type=0x01, message=bytes(300)))

    def test_unsupported_character(self, encoder):
        """Test codec errors propagate from the encoder."""
        with pytest.raises(UnsupportedCharacter):
            encoder.encode(Command(command_type=0x01, message="hello", encoding=PayloadEncoding.ALPHABET))

    def test_unknown_command_type_is_encodable(self, encoder):
        """Test command types outside the enumeration are still framed."""
        frame = encoder.encode(Command(command_type=0x7E))
        assert frame[3] == 0x7E
        assert len(frame) == 6

    def test_deterministic(self, encoder):
        """Test identical commands give identical bytes."""
        command = Command(command_type=0x01, message="да", encoding=PayloadEncoding.ALPHABET)
        assert encoder.encode(command) == encoder.encode(command)

    def test_frame_length_and_length_byte(self, encoder):
        """Test frame length is 6 + payload length."""
        for size in (0, 1, 17, 255):
            frame = encoder.encode(Command(command_type=0x01, message=bytes(size)))
            assert len(frame) == 6 + size
            assert frame[4] == size

    def test_none_command(self, encoder):
        """Test None command is a contract violation."""
        with pytest.raises(ValueError):
            encoder.encode(None)
