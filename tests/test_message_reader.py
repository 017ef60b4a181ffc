"""Tests for MessageReader."""

import io

import pytest

from maildir.services.email_parser import EmailParseError, MessageDefectError, MessageReader


class TestMessageReader:
    """Test header and message parsing."""

    RAW = (
        b"From: sender@example.com\n"
        b"Subject: =?utf-8?B?5Lit5paH?=\n"
        b"X-Tag: one\n"
        b"X-Tag: two\n"
        b"\n"
        b"Body text\n"
    )

    @pytest.fixture
    def reader(self):
        """Create a lenient reader."""
        return MessageReader()

    def test_read_header(self, reader):
        """Test headers are decoded and repeated fields kept."""
        header = reader.read_header(io.BytesIO(self.RAW))

        assert header["Subject"] == "中文"
        assert header.get_all("X-Tag") == ["one", "two"]

    def test_read_message(self, reader):
        """Test the body is available on a full parse."""
        message = reader.read_message(io.BytesIO(self.RAW))
        assert message.get_content() == "Body text\n"

    def test_lenient_on_defects(self, reader):
        """Test malformed input is returned with defects recorded."""
        message = reader.read_message(io.BytesIO(b"not a header line\n\nbody\n"))
        assert message.defects

    def test_strict_raises_on_defects(self):
        """Test strict mode surfaces parser defects."""
        reader = MessageReader(strict=True)

        with pytest.raises(MessageDefectError) as exc_info:
            reader.read_message(io.BytesIO(b"not a header line\n\nbody\n"))
        assert isinstance(exc_info.value, EmailParseError)
        assert exc_info.value.defects

    def test_strict_accepts_clean_message(self):
        """Test strict mode passes well-formed messages."""
        reader = MessageReader(strict=True)
        header = reader.read_header(io.BytesIO(self.RAW))
        assert header["From"] == "sender@example.com"
