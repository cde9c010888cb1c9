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

"""Validate documents against one definition of a compiled schema."""

import logging
from pathlib import Path
from typing import Optional, Union

from .document_parser import parse_document
from .engine.base import SchemaEngine
from .engine.jsonschema_engine import JsonSchemaEngine
from .error_extractor import extract_validation_errors
from .exceptions import DefinitionResolutionError
from .input_reader import read_input
from .models import ValidationError, ValidationInput, ValidationResult
from .schema_loader import CompiledSchema, load_schema

logger = logging.getLogger(__name__)


class Validator:
    """Validates documents against a schema definition.

    The schema is read and compiled once in the constructor; reuse the instance
    for as many documents as needed. Example::

        validator = Validator("schema.yaml", "#Config")
        result = validator.validate(
            ValidationInput.from_file("config.yaml", DataFormat.YAML)
        )
        if not result.valid:
            print(format_results([result]))

    ``validate`` returns a failing ValidationResult for invalid documents and
    raises a SchemaBridgeError only when validation itself cannot run
    (unreadable input, unsupported format).
    """

    def __init__(
        self,
        schema_path: Union[str, Path],
        definition_name: str,
        engine: Optional[SchemaEngine] = None,
        *,
        keep_index_segments: bool = False,
    ):
        """Load the schema and check that it defines ``definition_name``.

        Args:
            schema_path: Path to the schema file
            definition_name: Definition to validate against (e.g. "#Config")
            engine: Schema engine; defaults to JsonSchemaEngine
            keep_index_segments: Keep list indices in error paths

        Raises:
            SchemaReadError: If the schema file cannot be read
            SchemaCompileError: If the schema does not compile
            DefinitionNotFoundError: If the schema does not define definition_name
        """
        engine = engine if engine is not None else JsonSchemaEngine()
        self._compiled = load_schema(schema_path, definition_name, engine)
        self._keep_index_segments = keep_index_segments
        # only the definition root is dropped from error paths; nested field
        # names of a dotted definition path stay visible
        self._root_markers = (definition_name.split(".")[0],) if definition_name else ()
        logger.info(f"Validator ready: {self._compiled.schema_path} {definition_name}")

    @property
    def schema_path(self) -> str:
        return self._compiled.schema_path

    @property
    def definition_name(self) -> str:
        return self._compiled.definition_name

    @property
    def compiled_schema(self) -> CompiledSchema:
        return self._compiled

    def validate(self, validation_input: ValidationInput) -> ValidationResult:
        """Validate a single input against the schema definition."""
        name = validation_input.name
        context = self._compiled.context

        data = read_input(validation_input)

        parsed = parse_document(context, data, validation_input.format, name)
        if not parsed.ok:
            return ValidationResult.failure(
                name, [ValidationError(message=f"failed to parse: {parsed.message}")]
            )

        definition = context.lookup(self._compiled.schema, self._compiled.definition_name)
        if not definition.exists:
            raise DefinitionResolutionError(
                f"schema {self._compiled.schema_path} does not define {self._compiled.definition_name}"
            )

        unified = context.unify(definition, parsed.value)

        error = context.check_concrete(unified)
        if error is not None:
            errors = extract_validation_errors(
                error,
                root_markers=self._root_markers,
                keep_index_segments=self._keep_index_segments,
            )
            logger.debug(f"{name}: invalid ({len(errors)} error(s))")
            return ValidationResult.failure(name, errors)

        logger.debug(f"{name}: valid")
        return ValidationResult.success(name)


def new_validator(
    schema_path: Union[str, Path],
    definition_name: str,
    engine: Optional[SchemaEngine] = None,
) -> Validator:
    """Create a Validator; see Validator.__init__ for the errors raised."""
    return Validator(schema_path, definition_name, engine)
