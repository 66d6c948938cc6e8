from __future__ import annotations

from types import SimpleNamespace

from bestbuy.decoder import decode


def test_object_mode_returns_attribute_objects():
    result = decode('{"name": "Best Buy", "path": [{"id": "cat00000"}]}')
    assert isinstance(result, SimpleNamespace)
    assert result.name == "Best Buy"
    assert result.path[0].id == "cat00000"


def test_associative_mode_preserves_key_order():
    result = decode('{"z": 1, "a": 2, "m": {"y": 1, "b": 2}}', associative=True)
    assert list(result) == ["z", "a", "m"]
    assert list(result["m"]) == ["y", "b"]


def test_arrays_decode_to_lists_in_both_modes():
    assert decode("[1, 2, 3]") == [1, 2, 3]
    assert decode("[1, 2, 3]", associative=True) == [1, 2, 3]


def test_malformed_json_yields_none():
    assert decode("<html>oops</html>") is None
    assert decode("") is None
    assert decode(None) is None


def test_raw_mode_returns_trimmed_text_unparsed():
    assert decode("  1.0.42\n", raw_mode=True) == "1.0.42"
    assert decode('{"a": 1}\n', raw_mode=True) == '{"a": 1}'


def test_bytes_are_decoded():
    assert decode(b'{"a": 1}', associative=True) == {"a": 1}
