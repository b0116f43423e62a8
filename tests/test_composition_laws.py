"""Structural laws of the composition keywords over generated schemas and values."""

from __future__ import annotations

import random
import unittest
from typing import Any

from schemacheck.validation.compiler import compile_schema
from schemacheck.validation.dispatcher import validate
from schemacheck.validation.values import from_python

ITERATIONS = 300
_KEYS = ("a", "b", "c")
_PATTERNS = ("^a", "b", "[0-9]")
_TYPES = ("null", "boolean", "integer", "number", "string", "array", "object")


class _Generator:
    def __init__(self, seed: int) -> None:
        self.rng = random.Random(seed)

    def value(self, depth: int = 2) -> Any:
        choice = self.rng.randrange(7 if depth > 0 else 5)
        if choice == 0:
            return None
        if choice == 1:
            return self.rng.random() < 0.5
        if choice == 2:
            return self.rng.randint(-3, 12)
        if choice == 3:
            return self.rng.choice((0.5, 1.5, 2.25, -0.1, 10.0))
        if choice == 4:
            return self.rng.choice(("", "a", "ab1", "b", "xyz"))
        if choice == 5:
            return [self.value(depth - 1) for _ in range(self.rng.randint(0, 3))]
        return {key: self.value(depth - 1) for key in self.rng.sample(_KEYS, self.rng.randint(0, 3))}

    def schema(self, depth: int = 2) -> dict[str, Any]:
        schema: dict[str, Any] = {}
        rng = self.rng
        if rng.random() < 0.4:
            schema["type"] = rng.choice(_TYPES) if rng.random() < 0.7 else rng.sample(_TYPES, 2)
        if rng.random() < 0.2:
            schema["minimum"] = rng.randint(-1, 5)
            schema["exclusiveMinimum"] = rng.random() < 0.5
        if rng.random() < 0.2:
            schema["maximum"] = rng.randint(2, 10)
            schema["exclusiveMaximum"] = rng.random() < 0.5
        if rng.random() < 0.15:
            schema["multipleOf"] = rng.choice((1, 2, 0.5))
        if rng.random() < 0.2:
            schema["minLength"] = rng.randint(0, 2)
        if rng.random() < 0.15:
            schema["pattern"] = rng.choice(_PATTERNS)
        if rng.random() < 0.15:
            schema["enum"] = [self.value(1) for _ in range(rng.randint(1, 3))]
        if rng.random() < 0.2:
            schema["required"] = rng.sample(_KEYS, rng.randint(1, 2))
        if rng.random() < 0.15:
            schema["uniqueItems"] = True
        if rng.random() < 0.15:
            schema["minItems"] = rng.randint(0, 2)
        if depth > 0:
            if rng.random() < 0.3:
                schema["properties"] = {key: self.schema(depth - 1) for key in rng.sample(_KEYS, 2)}
            if rng.random() < 0.15:
                schema["additionalProperties"] = rng.random() < 0.5
            if rng.random() < 0.15:
                schema["patternProperties"] = {rng.choice(_PATTERNS): self.schema(depth - 1)}
            if rng.random() < 0.2:
                schema["items"] = (
                    self.schema(depth - 1)
                    if rng.random() < 0.5
                    else [self.schema(depth - 1) for _ in range(rng.randint(1, 2))]
                )
            if rng.random() < 0.15:
                schema["anyOf"] = [self.schema(depth - 1) for _ in range(2)]
            if rng.random() < 0.15:
                schema["oneOf"] = [self.schema(depth - 1) for _ in range(2)]
            if rng.random() < 0.1:
                schema["not"] = self.schema(depth - 1)
            if rng.random() < 0.1:
                schema["dependencies"] = {rng.choice(_KEYS): rng.sample(_KEYS, 1)}
        return schema


def _is_valid(schema: dict[str, Any], instance: Any) -> bool:
    return validate(compile_schema(schema), from_python(instance)).is_valid()


class CompositionLawTests(unittest.TestCase):
    def test_double_negation_preserves_validity(self) -> None:
        gen = _Generator(seed=4)
        for index in range(ITERATIONS):
            schema, instance = gen.schema(), gen.value()
            with self.subTest(index=index, schema=schema, instance=instance):
                self.assertEqual(
                    _is_valid({"not": {"not": schema}}, instance),
                    _is_valid(schema, instance),
                )

    def test_all_of_is_union_of_branch_messages(self) -> None:
        gen = _Generator(seed=11)
        for index in range(ITERATIONS):
            node = compile_schema({"allOf": [gen.schema(), gen.schema(), gen.schema()]})
            value = from_python(gen.value())
            with self.subTest(index=index):
                branch_outcomes = [validate(branch, value) for branch in node.all_of]
                expected = [message for outcome in branch_outcomes for message in outcome.messages()]
                all_valid = all(outcome.is_valid() for outcome in branch_outcomes)
                if not all_valid:
                    expected.append("(root) : (root) failed to validate all of the schema")

                outcome = validate(node, value)
                self.assertEqual(outcome.is_valid(), all_valid)
                self.assertCountEqual(outcome.messages(), expected)

    def test_one_of_valid_iff_exactly_one_branch_validates(self) -> None:
        gen = _Generator(seed=23)
        for index in range(ITERATIONS):
            node = compile_schema({"oneOf": [gen.schema(), gen.schema(), gen.schema()]})
            value = from_python(gen.value())
            with self.subTest(index=index):
                matches = sum(validate(branch, value).is_valid() for branch in node.one_of)
                outcome = validate(node, value)
                self.assertEqual(outcome.is_valid(), matches == 1)
                if matches >= 2:
                    self.assertEqual(
                        outcome.messages(),
                        ["(root) : (root) failed to validate exactly one of the schema"],
                    )

    def test_any_of_valid_iff_some_branch_validates(self) -> None:
        gen = _Generator(seed=37)
        for index in range(ITERATIONS):
            node = compile_schema({"anyOf": [gen.schema(), gen.schema()]})
            value = from_python(gen.value())
            with self.subTest(index=index):
                branch_outcomes = [validate(branch, value) for branch in node.any_of]
                outcome = validate(node, value)
                self.assertEqual(outcome.is_valid(), any(o.is_valid() for o in branch_outcomes))
                if not outcome.is_valid():
                    best = branch_outcomes[0]
                    if branch_outcomes[1].score > best.score:
                        best = branch_outcomes[1]
                    self.assertEqual(
                        outcome.messages(),
                        best.messages() + ["(root) : (root) failed to validate any of the schema"],
                    )


if __name__ == "__main__":
    unittest.main()
