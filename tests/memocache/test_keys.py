from __future__ import annotations

from memocache import FALLBACK_DELIMITER, default_key_generator


class _Opaque:
    def __init__(self, label: str) -> None:
        self.label = label

    def __str__(self) -> str:
        return f"opaque:{self.label}"


def test_positional_arguments_serialize_as_json_list():
    assert default_key_generator(1, "x") == '[1,"x"]'
    assert default_key_generator() == "[]"
    assert default_key_generator([1, 2], {"a": None}) == '[[1,2],{"a":null}]'


def test_fingerprint_is_stable_across_calls():
    args = ({"b": 2, "a": [1, 2.5]}, "q", None)
    assert default_key_generator(*args) == default_key_generator(*args)


def test_distinguishable_values_get_distinct_fingerprints():
    assert default_key_generator(1) != default_key_generator("1")
    assert default_key_generator(1) != default_key_generator(True)
    assert default_key_generator(1) != default_key_generator(1.5)
    assert default_key_generator(1, 2) != default_key_generator([1, 2])


def test_keyword_order_does_not_change_fingerprint():
    assert default_key_generator(1, a=1, b=2) == default_key_generator(1, b=2, a=1)
    assert default_key_generator(a=1) == '{"args":[],"kwargs":{"a":1}}'


def test_keyword_form_never_collides_with_positional_form():
    assert default_key_generator([], {"a": 1}) != default_key_generator(a=1)
    assert default_key_generator({"args": [], "kwargs": {"a": 1}}) != (
        default_key_generator(a=1)
    )


def test_unserializable_arguments_fall_back_to_joined_strings():
    key = default_key_generator(_Opaque("a"), 2, "z")
    assert key == FALLBACK_DELIMITER.join(["opaque:a", "2", "z"])


def test_fallback_includes_sorted_keyword_pairs():
    key = default_key_generator(_Opaque("a"), z=1, flag=True)
    assert key == "opaque:a|flag=True|z=1"


def test_circular_structure_falls_back_instead_of_failing():
    loop: list = []
    loop.append(loop)
    assert default_key_generator(loop, 1) == f"{loop}|1"


def test_fallback_does_not_guarantee_distinct_fingerprints():
    assert default_key_generator(_Opaque("same")) == default_key_generator(
        _Opaque("same")
    )


def test_dict_key_order_is_ignored_with_and_without_keywords():
    assert default_key_generator({"a": 1, "b": 2}) == default_key_generator(
        {"b": 2, "a": 1}
    )
    assert default_key_generator({"a": 1, "b": 2}, flag=True) == (
        default_key_generator({"b": 2, "a": 1}, flag=True)
    )
