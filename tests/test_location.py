"""Unit tests for document locations."""

from __future__ import annotations

import unittest

from schemacheck.validation.context import Location


class LocationTests(unittest.TestCase):
    def test_root_renders_label(self) -> None:
        self.assertEqual(Location.root().render(), "(root)")
        self.assertEqual(Location.root("ROOT").render(), "ROOT")

    def test_child_appends_without_mutating_parent(self) -> None:
        root = Location.root()
        items = root.child("items")
        first = items.child(0)
        second = items.child(1)

        self.assertEqual(root.render(), "(root)")
        self.assertEqual(first.render(), "(root).items.0")
        self.assertEqual(second.render(), "(root).items.1")
        self.assertEqual(first.segments(), ("(root)", "items", "0"))

    def test_custom_delimiter(self) -> None:
        location = Location.root().child("a").child("b")
        self.assertEqual(location.render("/"), "(root)/a/b")
        self.assertEqual(str(location), "(root).a.b")


if __name__ == "__main__":
    unittest.main()
