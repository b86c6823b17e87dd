"""
Unit tests for quoted-printable / base64 decoding and its lossy fallback.
"""
from emlkit.mime.decoder import TransferDecoder


class TestQuotedPrintable:
    def test_hex_escape(self):
        assert TransferDecoder.decode_quoted_printable("Caf=E9") == "Café"

    def test_lowercase_hex(self):
        assert TransferDecoder.decode_quoted_printable("a=3db") == "a=b"

    def test_soft_line_breaks_removed(self):
        assert TransferDecoder.decode_quoted_printable("long li=\nne and=\r\nmore") == "long line andmore"

    def test_invalid_escape_left_literal(self):
        assert TransferDecoder.decode_quoted_printable("price =ZZ 10") == "price =ZZ 10"

    def test_empty(self):
        assert TransferDecoder.decode_quoted_printable("") == ""


class TestBase64:
    def test_valid(self):
        assert TransferDecoder.decode_base64("SGVsbG8gV29ybGQ=") == "Hello World"

    def test_whitespace_is_ignored(self):
        assert TransferDecoder.decode_base64("SGVsbG8g\n  V29ybGQ=\n") == "Hello World"

    def test_invalid_alphabet_returns_input(self):
        value = "this is not base64!"
        assert TransferDecoder.decode_base64(value) == value

    def test_bad_padding_returns_input(self):
        assert TransferDecoder.decode_base64("SGVsbG8") == "SGVsbG8"


class TestDecodeDispatch:
    def test_by_encoding_name(self):
        assert TransferDecoder.decode("Caf=E9", "Quoted-Printable") == "Café"
        assert TransferDecoder.decode("SGVsbG8gV29ybGQ=", "base64") == "Hello World"

    def test_identity_encodings_pass_through(self):
        for encoding in ("7bit", "8bit", "binary", ""):
            assert TransferDecoder.decode("Caf=E9", encoding) == "Caf=E9"
