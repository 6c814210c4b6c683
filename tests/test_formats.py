"""
Tests for data-URI handling and the supported-format list.
"""
from veganscan.orchestrator.contracts import EncodedImage
from veganscan.orchestrator import formats


class TestSupportedFormats:
    def test_exactly_four_formats(self):
        assert formats.SUPPORTED_FORMATS == ["image/png", "image/jpeg", "image/gif", "image/webp"]

    def test_is_supported(self):
        assert formats.is_supported("image/jpeg")
        assert formats.is_supported("IMAGE/WEBP")
        assert not formats.is_supported("image/bmp")
        assert not formats.is_supported("")
        assert not formats.is_supported(None)

    def test_message_lists_every_type(self):
        msg = formats.unsupported_format_message()
        assert msg == "Unsupported image format. Please use one of: image/png, image/jpeg, image/gif, image/webp"


class TestDataUri:
    def test_parse(self):
        mime, payload = formats.parse_data_uri("data:image/JPEG;base64,AAAA")
        assert mime == "image/jpeg"
        assert payload == "AAAA"

    def test_parse_not_a_data_uri(self):
        assert formats.parse_data_uri("hello") == ("", "")
        assert formats.parse_data_uri("data:image/png;base64") == ("", "")

    def test_build_then_read_back(self):
        img = EncodedImage(data=b"\x00\x01abc", mime_type="image/png")
        uri = formats.to_data_uri(img)
        assert uri.startswith("data:image/png;base64,")
        mime, payload = formats.parse_data_uri(uri)
        assert mime == "image/png"
        assert formats.decode_payload(payload) == b"\x00\x01abc"

    def test_bad_base64(self):
        assert formats.decode_payload("not base64!!") is None
