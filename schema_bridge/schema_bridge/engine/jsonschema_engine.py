# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""JSON Schema backed engine.

Schemas are JSON Schema documents written in JSON or YAML. A definition name
such as ``#Config`` selects ``$defs/Config`` (or ``definitions/Config`` for
older drafts); documents are checked with ``jsonschema`` and every violation is
reported with the document path and, when known, its source position.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, Union
from urllib.parse import quote

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.protocols import Validator as JsonSchemaValidator
from jsonschema.validators import validator_for
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from .base import (
    EngineCompileError,
    EngineError,
    EngineErrorList,
    EngineSyntaxError,
    EngineValue,
    EvaluationContext,
    Position,
    SchemaEngine,
)
from .source_map import (
    SourceMap,
    build_json_source_map,
    build_source_map,
    json_pointer_escape,
    positions_for,
)
from .yaml_loader import load_document

logger = logging.getLogger(__name__)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

_MISSING = object()


class SchemaViolation(EngineError):
    """One JSON Schema keyword that rejected part of a document."""

    def __init__(self, message: str, keyword: str, path: List[str], positions: List[Position]):
        super().__init__(message, path=path, positions=positions)
        self.keyword = keyword


@dataclass(frozen=True)
class SchemaValue(EngineValue):
    """A compiled schema document, or the definition found at ``pointer`` in it."""

    document: Dict[str, Any]
    uri: str
    pointer: str = ""
    contents: Any = field(default=_MISSING, compare=False)
    definition_path: Tuple[str, ...] = ()

    @property
    def exists(self) -> bool:
        return self.contents is not _MISSING


@dataclass(frozen=True)
class DocumentValue(EngineValue):
    """A parsed data document and where its values came from."""

    data: Any
    filename: str
    source_map: SourceMap = field(default_factory=dict, compare=False)

    @property
    def exists(self) -> bool:
        return True


@dataclass(frozen=True)
class UnifiedValue(EngineValue):
    """A definition paired with the document it has to accept."""

    schema: SchemaValue
    document: DocumentValue

    @property
    def exists(self) -> bool:
        return self.schema.exists


def _mark_positions(exc: Exception) -> List[Position]:
    mark = getattr(exc, "problem_mark", None)
    if mark is None:
        return []
    return [Position(mark.line + 1, mark.column + 1)]


def _format_segment(token: Union[str, int]) -> str:
    if isinstance(token, int):
        return f"[{token}]"
    if _IDENTIFIER_RE.match(token):
        return token
    # quoted verbatim; readers only strip the surrounding quotes
    return f'"{token}"'


def _candidate_pointers(path: str) -> List[str]:
    """JSON pointers a definition path may refer to, in lookup order."""
    if not path:
        return [""]
    if path.startswith("#/"):
        return [path[1:]]
    if path.startswith("/"):
        return [path]

    head, *rest = path.split(".")
    suffix = "".join(f"/properties/{json_pointer_escape(s)}" for s in rest)
    if head.startswith("#"):
        name = json_pointer_escape(head[1:])
        return [f"/$defs/{name}{suffix}", f"/definitions/{name}{suffix}"]
    return [f"/properties/{json_pointer_escape(head)}{suffix}"]


def _definition_segments(path: str) -> Tuple[str, ...]:
    if not path:
        return ()
    if path.startswith("/") or path.startswith("#/"):
        return (path,)
    return tuple(path.split("."))


def resolve_pointer(document: Any, pointer: str) -> Any:
    """Return the value at ``pointer`` or the ``_MISSING`` sentinel."""
    if not pointer:
        return document
    current = document
    for raw in pointer.lstrip("/").split("/"):
        token = raw.replace("~1", "/").replace("~0", "~")
        if isinstance(current, dict):
            if token not in current:
                return _MISSING
            current = current[token]
        elif isinstance(current, list):
            try:
                current = current[int(token)]
            except (ValueError, IndexError):
                return _MISSING
        else:
            return _MISSING
    return current


class JsonSchemaContext(EvaluationContext):
    """Evaluation context backed by ``jsonschema``."""

    def __init__(self, default_validator: Type[JsonSchemaValidator] = Draft202012Validator):
        self._default_validator = default_validator
        self._validators: Dict[Tuple[str, str], JsonSchemaValidator] = {}

    def compile(self, text: str, filename: str) -> SchemaValue:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise EngineCompileError(f"{filename}: {exc}", positions=_mark_positions(exc)) from exc

        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise EngineCompileError(
                f"{filename}: schema must be a mapping, got {type(document).__name__}"
            )

        validator_cls = validator_for(document, default=self._default_validator)
        try:
            validator_cls.check_schema(document)
        except SchemaError as exc:
            path = [_format_segment(p) for p in exc.absolute_path]
            raise EngineCompileError(f"{filename}: {exc.message}", path=path) from exc

        uri = Path(filename).absolute().as_uri()
        logger.debug(f"Compiled schema {filename} with {validator_cls.__name__}")
        return SchemaValue(document=document, uri=uri, contents=document)

    def lookup(self, value: EngineValue, path: str) -> SchemaValue:
        if not isinstance(value, SchemaValue):
            raise TypeError(f"cannot look up {path!r} in {type(value).__name__}")

        segments = _definition_segments(path)
        for pointer in _candidate_pointers(path):
            contents = resolve_pointer(value.document, pointer)
            if contents is not _MISSING:
                return SchemaValue(
                    document=value.document,
                    uri=value.uri,
                    pointer=pointer,
                    contents=contents,
                    definition_path=segments,
                )
        return SchemaValue(document=value.document, uri=value.uri, definition_path=segments)

    def unify(self, schema: EngineValue, document: EngineValue) -> UnifiedValue:
        return UnifiedValue(schema=schema, document=document)

    def check_concrete(self, value: EngineValue) -> Optional[EngineError]:
        if not isinstance(value, UnifiedValue):
            raise TypeError(f"cannot validate {type(value).__name__}")
        if not value.exists:
            return EngineError("definition does not exist", path=list(value.schema.definition_path))

        validator = self._validator_for(value.schema)
        violations: List[EngineError] = []
        for error in validator.iter_errors(value.document.data):
            instance_path = list(error.absolute_path)
            violations.append(
                SchemaViolation(
                    error.message,
                    keyword=str(error.validator),
                    path=list(value.schema.definition_path) + [_format_segment(p) for p in instance_path],
                    positions=positions_for(value.document.source_map, instance_path),
                )
            )

        if not violations:
            return None
        logger.debug(f"{value.document.filename}: {len(violations)} schema violation(s)")
        return EngineErrorList(violations)

    def parse_json(self, data: bytes, filename: str) -> DocumentValue:
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError as exc:
            raise EngineSyntaxError(
                f"{filename}:{exc.lineno}:{exc.colno}: {exc.msg}",
                positions=[Position(exc.lineno, exc.colno)],
            ) from exc
        except ValueError as exc:
            raise EngineSyntaxError(f"{filename}: {exc}") from exc

        return DocumentValue(data=parsed, filename=filename, source_map=build_json_source_map(data))

    def parse_yaml(self, data: bytes, filename: str) -> DocumentValue:
        try:
            parsed = load_document(data)
        except yaml.YAMLError as exc:
            raise EngineSyntaxError(f"{filename}: {exc}", positions=_mark_positions(exc)) from exc

        if parsed is None:
            parsed = {}
        return DocumentValue(data=parsed, filename=filename, source_map=build_source_map(data))

    def _validator_for(self, schema: SchemaValue) -> JsonSchemaValidator:
        key = (schema.uri, schema.pointer)
        validator = self._validators.get(key)
        if validator is None:
            validator_cls = validator_for(schema.document, default=self._default_validator)
            resource = Resource.from_contents(schema.document, default_specification=DRAFT202012)
            registry = Registry().with_resource(schema.uri, resource).crawl()
            validator = validator_cls(
                {"$ref": f"{schema.uri}#{quote(schema.pointer)}"},
                registry=registry,
                format_checker=validator_cls.FORMAT_CHECKER,
            )
            self._validators[key] = validator
        return validator


class JsonSchemaEngine(SchemaEngine):
    """Engine that validates documents against JSON Schema definitions."""

    name = "jsonschema"

    def __init__(self, default_validator: Type[JsonSchemaValidator] = Draft202012Validator):
        self._default_validator = default_validator

    def new_context(self) -> JsonSchemaContext:
        return JsonSchemaContext(self._default_validator)
