"""
Unit tests for tabletext.core.normalizer.

Covers whitespace collapsing, entity handling, encoding repair and
content hashing.
"""
import re

import pytest

from tabletext.config.settings import configure
from tabletext.core.normalizer import (
    TextNormalizer,
    content_hash,
    decode_entities,
    encode_entities,
    normalize,
)


class TestNormalize:
    """Tests for normalize()."""

    def test_none_stays_none(self):
        assert normalize(None) is None

    def test_collapses_and_trims_spaces(self):
        assert normalize("  a   b  ") == "a b"

    def test_collapses_unicode_spaces(self):
        assert normalize("\u3000abc\u00a0 def\t\n") == "abc def"

    def test_decodes_entities(self):
        assert normalize("a&amp;b") == "a&b"
        assert normalize("    abc&amp;&gt;     ") == "abc&>"

    def test_coerces_non_strings(self):
        assert normalize(123) == "123"

    def test_valid_utf8_bytes(self):
        assert normalize("  caf\u00e9 ".encode("utf-8")) == "caf\u00e9"

    def test_bad_bytes_are_replaced(self):
        assert normalize(b"\xaa abc") == "\ufffd abc"

    def test_surrogate_escaped_text_is_repaired(self):
        broken = b"\xaa abc".decode("utf-8", errors="surrogateescape")
        assert normalize(broken) == "\ufffd abc"

    def test_repair_collapses_misencoded_no_break_space(self):
        raw = b"caf\xe9\xc2\xa0 bar"
        assert normalize(raw, encoding="cp1252") == "caf\u00e9 bar"

    def test_unknown_encoding_never_raises(self):
        assert normalize(b"\xaa x", encoding="no-such-codec") == "\ufffd x"

    def test_binary_codec_falls_back_to_ascii(self):
        assert normalize(b"\xaa abc", encoding="hex") == "\ufffd abc"

    def test_binary_codec_on_instance_falls_back_to_ascii(self):
        normalizer = TextNormalizer(encoding="base64")
        assert normalizer.normalize(b"\xaa abc") == "\ufffd abc"

    def test_configured_encoding_is_used(self):
        configure(encoding="cp1252")
        assert normalize(b"caf\xe9") == "caf\u00e9"

    def test_instance_encoding_wins_over_settings(self):
        normalizer = TextNormalizer(encoding="latin-1")
        assert normalizer.normalize(b"\xaa abc") == "\u00aa abc"


class TestEntities:
    """Tests for encode_entities() / decode_entities()."""

    def test_encode(self):
        assert encode_entities("a&b>") == "a&amp;b&gt;"
        assert encode_entities("abc&abc>") == "abc&amp;abc&gt;"

    def test_decode(self):
        assert decode_entities("abc&amp;abc&gt;") == "abc&abc>"

    @pytest.mark.parametrize("text", ["plain", "a&b>", "<td>x</td>", "say \"hi\" 'there'"])
    def test_round_trip(self, text):
        assert decode_entities(encode_entities(text)) == text


class TestContentHash:
    """Tests for content_hash()."""

    def test_is_a_sha1_hex_digest(self):
        digest = content_hash("abc")
        assert re.fullmatch(r"[0-9a-f]{40}", digest)

    def test_consistent_for_strings(self):
        assert content_hash("abc") == content_hash("abc")

    def test_unique_for_strings(self):
        assert content_hash("aaa") != content_hash("bbb")

    def test_consistent_for_numbers(self):
        assert content_hash(123) == content_hash(123)

    def test_unique_for_numbers(self):
        assert content_hash(111) != content_hash(222)

    def test_mapping_order_does_not_matter(self):
        hash_a = content_hash({"aaa": 111, "bbb": "BBB"})
        hash_b = content_hash({"bbb": "BBB", "aaa": 111})
        assert hash_a == hash_b

    def test_nested_mapping_order_does_not_matter(self):
        hash_a = content_hash({"x": {"a": 1, "b": [1, 2]}, "y": None})
        hash_b = content_hash({"y": None, "x": {"b": [1, 2], "a": 1}})
        assert hash_a == hash_b

    def test_unique_for_mappings(self):
        assert content_hash({"aaa": "AAA"}) != content_hash({"aaa": "111"})

    def test_number_and_string_values_differ(self):
        assert content_hash({"aaa": 111}) != content_hash({"aaa": "111"})

    def test_number_and_string_keys_differ(self):
        assert content_hash({1: "a"}) != content_hash({"1": "a"})

    def test_json_text_differs_from_mapping(self):
        assert content_hash('{"a": 1}') != content_hash({"a": 1})

    def test_number_and_string_scalars_differ(self):
        assert content_hash(1) != content_hash("1")
