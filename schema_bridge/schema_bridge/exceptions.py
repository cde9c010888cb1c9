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

"""Custom exceptions for the schema bridge.

Every exception defined here is a process error: the validation machinery
itself could not run. Invalid documents are never reported through
exceptions, they come back as a failing ValidationResult.
"""


class SchemaBridgeError(Exception):
    """Base exception for schema bridge errors."""
    pass


class SchemaLoadError(SchemaBridgeError):
    """Exception raised when a validator cannot be constructed from a schema."""
    pass


class SchemaReadError(SchemaLoadError):
    """Exception raised when the schema file cannot be read."""
    pass


class SchemaCompileError(SchemaLoadError):
    """Exception raised when the schema does not compile."""
    pass


class DefinitionNotFoundError(SchemaLoadError):
    """Exception raised when the requested definition is absent from the schema."""

    def __init__(self, schema_path: str, definition_name: str):
        self.schema_path = schema_path
        self.definition_name = definition_name
        super().__init__(f"schema {schema_path} does not define {definition_name}")


class InputError(SchemaBridgeError):
    """Exception raised when the input document cannot be acquired."""
    pass


class InputReadError(InputError):
    """Exception raised for I/O failures while reading an input source."""
    pass


class InputContractError(InputError):
    """Exception raised when a ValidationInput is missing its payload."""
    pass


class UnsupportedFormatError(SchemaBridgeError):
    """Exception raised for a data format tag the parser does not know."""
    pass


class DefinitionResolutionError(SchemaBridgeError):
    """Exception raised when a compiled schema loses its definition after construction."""
    pass
