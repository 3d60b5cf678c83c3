"""Tests for the structured-field JSON codec."""

from copydesk.content.codec import (
    decode_json,
    decode_list,
    decode_mapping,
    encode_json,
    normalize_tags,
)


class TestEncode:
    """Tests for encode_json."""

    def test_none_stays_null(self):
        assert encode_json(None) is None

    def test_encodes_nested_values(self):
        assert encode_json({"version1": "Hi"}) == '{"version1": "Hi"}'
        assert encode_json([]) == "[]"


class TestDecode:
    """Decoding never raises; unusable input yields the default."""

    def test_decodes_valid_json(self):
        assert decode_json('{"a": 1}') == {"a": 1}

    def test_missing_or_empty_returns_default(self):
        assert decode_json(None, default=[]) == []
        assert decode_json("", default={}) == {}

    def test_malformed_json_returns_default(self):
        assert decode_json("{not json", default="fallback") == "fallback"
        assert decode_json("[1, 2", default=None) is None

    def test_wrong_shape_returns_default(self):
        assert decode_mapping("[1, 2]", {}) == {}
        assert decode_list('{"a": 1}', []) == []
        assert decode_list('"just a string"') is None

    def test_already_decoded_values_pass_through(self):
        assert decode_mapping({"version1": "x"}) == {"version1": "x"}
        assert decode_list([1, 2]) == [1, 2]


class TestNormalizeTags:
    """Tests for normalize_tags."""

    def test_none_is_preserved(self):
        assert normalize_tags(None) is None

    def test_strips_dedupes_and_drops_blanks(self):
        assert normalize_tags([" launch", "launch", "", "  ", "promo"]) == ["launch", "promo"]
