"""Unit tests for the JSON value model and canonical serialization."""

from __future__ import annotations

from decimal import Decimal
import unittest

from schemacheck.validation.values import (
    NULL,
    Array,
    Bool,
    DocumentModelError,
    Number,
    Object,
    String,
    canonical_json,
    from_python,
    is_integral,
    to_python,
)


class FromPythonTests(unittest.TestCase):
    def test_narrows_nested_structures(self) -> None:
        value = from_python({"name": "demo", "tags": ["a", 1, None], "ok": True})
        self.assertEqual(
            value,
            Object(
                {
                    "name": String("demo"),
                    "tags": Array((String("a"), Number(1.0), NULL)),
                    "ok": Bool(True),
                }
            ),
        )

    def test_booleans_do_not_become_numbers(self) -> None:
        self.assertEqual(from_python(True), Bool(True))
        self.assertEqual(from_python(0), Number(0.0))

    def test_accepts_decimal_numbers(self) -> None:
        self.assertEqual(from_python(Decimal("2.5")), Number(2.5))

    def test_rejects_non_string_keys(self) -> None:
        with self.assertRaisesRegex(DocumentModelError, "keys must be strings"):
            from_python({1: "one"})

    def test_rejects_unsupported_types(self) -> None:
        with self.assertRaisesRegex(DocumentModelError, "unsupported document type: set"):
            from_python({"a": {1, 2}})

    def test_rejects_integers_beyond_double_range(self) -> None:
        with self.assertRaises(DocumentModelError):
            from_python(10**400)


class NumberClassificationTests(unittest.TestCase):
    def test_whole_numbers_are_integers(self) -> None:
        self.assertTrue(Number(3.0).is_integer)
        self.assertFalse(Number(3.5).is_integer)

    def test_non_finite_numbers_are_not_integers(self) -> None:
        self.assertFalse(is_integral(float("inf")))
        self.assertFalse(is_integral(float("nan")))


class CanonicalJsonTests(unittest.TestCase):
    def test_sorts_keys_and_drops_integral_fractions(self) -> None:
        value = from_python({"b": 1.0, "a": [2, "x"]})
        self.assertEqual(canonical_json(value), '{"a":[2,"x"],"b":1}')

    def test_equal_values_serialize_equally(self) -> None:
        left = from_python({"a": 1, "b": [True, None]})
        right = from_python({"b": [True, None], "a": 1.0})
        self.assertEqual(canonical_json(left), canonical_json(right))

    def test_cross_kind_values_differ(self) -> None:
        self.assertNotEqual(canonical_json(Number(1.0)), canonical_json(String("1")))
        self.assertNotEqual(canonical_json(Number(1.0)), canonical_json(Bool(True)))

    def test_nan_cannot_be_serialized(self) -> None:
        with self.assertRaises(ValueError):
            canonical_json(Number(float("nan")))

    def test_to_python_round_trips_plain_data(self) -> None:
        payload = {"a": [1, 2.5, "x", None, False], "b": {}}
        self.assertEqual(to_python(from_python(payload)), payload)


if __name__ == "__main__":
    unittest.main()
