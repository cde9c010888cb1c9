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

"""Schema loader: read, compile and check a schema once per validator."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .engine.base import EngineError, EngineValue, EvaluationContext, SchemaEngine
from .exceptions import DefinitionNotFoundError, SchemaCompileError, SchemaReadError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledSchema:
    """A compiled schema and the context it was compiled in.

    Owned by a single Validator and never modified after loading.
    """

    schema_path: str
    definition_name: str
    context: EvaluationContext
    schema: EngineValue


def load_schema(schema_path: Union[str, Path], definition_name: str, engine: SchemaEngine) -> CompiledSchema:
    """Load a schema file and make sure it defines ``definition_name``.

    Raises:
        SchemaReadError: If the schema file cannot be read.
        SchemaCompileError: If the engine rejects the schema.
        DefinitionNotFoundError: If the definition does not exist in the schema.
    """
    path = str(schema_path)

    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SchemaReadError(f"reading schema file {path}: {exc}") from exc

    context = engine.new_context()
    try:
        schema = context.compile(text, filename=path)
    except EngineError as exc:
        raise SchemaCompileError(f"compiling schema: {exc}") from exc

    if not context.lookup(schema, definition_name).exists:
        raise DefinitionNotFoundError(path, definition_name)

    logger.debug(f"Loaded schema {path} (definition {definition_name}, engine {engine.name})")
    return CompiledSchema(
        schema_path=path,
        definition_name=definition_name,
        context=context,
        schema=schema,
    )
