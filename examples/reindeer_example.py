#!/usr/bin/env python3
"""
Reindeer roster validation example

Walks through the three stages of tightening a schema for reindeer
records: a bare record, optional aliases, and a custom date type.
"""

from pathlib import Path

from rx_validate.decoding import load_document
from rx_validate.validation import TypeRegistry, compile_schema, date_type, render_lines, validate

HERE = Path(__file__).resolve().parent / "reindeer"


def run(schema_name: str, registry: TypeRegistry) -> None:
    schema = compile_schema(load_document(HERE / schema_name), registry)
    print(f"== {schema_name}")
    for source in sorted(HERE.glob("*.json")):
        result = validate(schema, load_document(source))
        status = "OK" if result.valid else f"{len(result)} failures"
        print(f"{source.name}: {status}")
        for line in render_lines(result):
            print(f"  {line}")


def main() -> None:
    run("schema-basic.yaml", TypeRegistry())
    run("schema-aliases.yaml", TypeRegistry())

    registry = TypeRegistry()
    registry.register("reindeer-date", date_type("reindeer-date"))
    run("schema-dated.yaml", registry)


if __name__ == "__main__":
    main()
