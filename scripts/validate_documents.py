#!/usr/bin/env python3
"""Validate JSON documents against a draft-04 JSON schema file.

Usage:
  python scripts/validate_documents.py --schema schemas/Course.json examples/Course.example.json

Exit codes: 0 all documents pass, 1 at least one fails, 2 load error.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from schemacheck.validation import (
    SchemaCompileError,
    SchemaDocument,
    ValidationConfig,
    ValidationConfigError,
)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate JSON documents against a JSON schema.")
    parser.add_argument("--schema", required=True, help="Path to the draft-04 schema file")
    parser.add_argument("documents", nargs="+", help="JSON documents to validate")
    parser.add_argument("--verbose", action="store_true", help="Log compile and validation details")
    return parser.parse_args(argv)


def load_schema(path: Path, config: ValidationConfig) -> SchemaDocument:
    return SchemaDocument.from_json(path.read_text(encoding="utf-8"), config=config)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    schema_path = Path(args.schema).resolve()
    try:
        schema = load_schema(schema_path, ValidationConfig.from_env())
    except (OSError, SchemaCompileError, ValidationConfigError) as exc:
        print(f"error: cannot load schema {schema_path}: {exc}", file=sys.stderr)
        return 2

    failed = 0
    for raw_path in args.documents:
        document_path = Path(raw_path).resolve()
        try:
            instance = json.loads(document_path.read_text(encoding="utf-8"))
            outcome = schema.validate(instance)
        except (OSError, ValueError) as exc:
            print(f"error: cannot load document {document_path}: {exc}", file=sys.stderr)
            return 2

        if outcome.is_valid():
            print(f"PASS {document_path.name}")
            continue

        failed += 1
        print(f"FAIL {document_path.name}")
        for message in outcome.messages():
            print(f"  {message}")

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
