"""Tests for deep equality and subset containment."""

from mockroute import deep_equal, is_subset


class TestDeepEqual:
    def test_nested_equal(self) -> None:
        assert deep_equal({"a": 1, "b": [1, 2]}, {"b": [1, 2], "a": 1}) is True

    def test_extra_key_not_equal(self) -> None:
        assert deep_equal({"a": 1}, {"a": 1, "b": 2}) is False

    def test_bool_is_not_number(self) -> None:
        assert deep_equal(True, 1) is False
        assert deep_equal({"a": 0}, {"a": False}) is False

    def test_int_equals_float(self) -> None:
        assert deep_equal(1, 1.0) is True

    def test_list_and_tuple_interchangeable(self) -> None:
        assert deep_equal([1, [2]], (1, (2,))) is True

    def test_list_order_matters(self) -> None:
        assert deep_equal([1, 2], [2, 1]) is False

    def test_string_is_not_sequence(self) -> None:
        assert deep_equal("ab", ["a", "b"]) is False


class TestIsSubset:
    def test_extra_keys_ignored(self) -> None:
        assert is_subset({"a": 1}, {"a": 1, "b": 2}) is True

    def test_nested_mapping(self) -> None:
        assert is_subset({"a": {"x": 1}}, {"a": {"x": 1, "y": 2}}) is True

    def test_value_mismatch(self) -> None:
        assert is_subset({"a": 2}, {"a": 1}) is False

    def test_missing_key(self) -> None:
        assert is_subset({"c": 1}, {"a": 1}) is False

    def test_sequence_prefix(self) -> None:
        assert is_subset([1], [1, 2]) is True
        assert is_subset([2], [1, 2]) is False

    def test_objects_inside_sequences(self) -> None:
        expected = {"items": [{"id": 1}]}
        actual = {"items": [{"id": 1, "name": "x"}, {"id": 2}]}
        assert is_subset(expected, actual) is True

    def test_scalars_never_subsets(self) -> None:
        assert is_subset(1, 1) is False

    def test_shape_mismatch(self) -> None:
        assert is_subset({"a": 1}, [1]) is False

    def test_bool_is_not_number(self) -> None:
        assert is_subset({"a": True}, {"a": 1}) is False
