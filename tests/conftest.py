"""Pytest configuration and fixtures for schema_bridge tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional

import pytest
import yaml

from schema_bridge.engine.base import (
    EngineCompileError,
    EngineError,
    EngineErrorList,
    EngineSyntaxError,
    EngineValue,
    EvaluationContext,
    Position,
    SchemaEngine,
)


CONFIG_SCHEMA = """\
$defs:
  Config:
    type: object
    properties:
      name:
        type: string
    required: [name]
    additionalProperties: false
"""


class FakeValue(EngineValue):
    """In-memory engine value."""

    def __init__(self, data: Any = None, exists: bool = True) -> None:
        self.data = data
        self._exists = exists

    @property
    def exists(self) -> bool:
        return self._exists


class FakeContext(EvaluationContext):
    """Engine context whose schemas are JSON objects of ``{definition: {field: type}}``.

    Type names are Python type names (``str``, ``int``...). Every declared
    field is required and no other field is allowed.
    """

    def __init__(self) -> None:
        self.definitions_dropped = False

    def drop_definitions(self) -> None:
        self.definitions_dropped = True

    def compile(self, text: str, filename: str) -> FakeValue:
        try:
            return FakeValue(json.loads(text))
        except ValueError as exc:
            raise EngineCompileError(f"{filename}: {exc}") from exc

    def lookup(self, value: EngineValue, path: str) -> FakeValue:
        if self.definitions_dropped or path not in value.data:
            return FakeValue(exists=False)
        return FakeValue({"name": path, "fields": value.data[path]})

    def unify(self, schema: EngineValue, document: EngineValue) -> FakeValue:
        return FakeValue({"schema": schema.data, "document": document.data})

    def check_concrete(self, value: EngineValue) -> Optional[EngineError]:
        name = value.data["schema"]["name"]
        fields = value.data["schema"]["fields"]
        document = value.data["document"]
        errors = []
        for field, type_name in fields.items():
            if field not in document:
                errors.append(EngineError(f"{name}.{field}: incomplete value {type_name}", path=[name, field]))
            elif type(document[field]).__name__ != type_name:
                errors.append(
                    EngineError(
                        f"{name}.{field}: conflicting values",
                        path=[name, field],
                        positions=[Position(0, 0), Position(2, 5)],
                    )
                )
        for field in document:
            if field not in fields:
                errors.append(EngineError(f"{name}.{field}: field not allowed", path=[name, field]))
        return EngineErrorList(errors) if errors else None

    def parse_json(self, data: bytes, filename: str) -> FakeValue:
        try:
            return FakeValue(json.loads(data))
        except ValueError as exc:
            raise EngineSyntaxError(f"{filename}: {exc}") from exc

    def parse_yaml(self, data: bytes, filename: str) -> FakeValue:
        try:
            return FakeValue(yaml.safe_load(data) or {})
        except yaml.YAMLError as exc:
            raise EngineSyntaxError(f"{filename}: {exc}") from exc


class FakeEngine(SchemaEngine):
    """Engine handing out FakeContexts; remembers them for inspection."""

    name = "fake"

    def __init__(self) -> None:
        self.contexts: list[FakeContext] = []

    def new_context(self) -> FakeContext:
        context = FakeContext()
        self.contexts.append(context)
        return context


@pytest.fixture
def fake_engine() -> FakeEngine:
    """A fresh in-memory engine."""
    return FakeEngine()


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a text file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_schema(write_file: Callable[[str, str], Path]) -> Path:
    """JSON Schema equivalent of ``#Config: {name: string}``."""
    return write_file("schema.yaml", CONFIG_SCHEMA)
