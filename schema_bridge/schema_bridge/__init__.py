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

"""Validate JSON/YAML documents against schema definitions.

Basic usage::

    from schema_bridge import DataFormat, ValidationInput, Validator, format_results

    validator = Validator("schema.yaml", "#Config")
    result = validator.validate(
        ValidationInput.from_file("config.yaml", DataFormat.YAML)
    )
    print(format_results([result]), end="")
"""

__version__ = "0.1.0"

from .exceptions import (
    DefinitionNotFoundError,
    DefinitionResolutionError,
    InputContractError,
    InputError,
    InputReadError,
    SchemaBridgeError,
    SchemaCompileError,
    SchemaLoadError,
    SchemaReadError,
    UnsupportedFormatError,
)
from .models import DataFormat, InputSourceType, ValidationError, ValidationInput, ValidationResult
from .formatter import format_results
from .validator import Validator, new_validator

__all__ = [
    "DataFormat",
    "InputSourceType",
    "ValidationError",
    "ValidationInput",
    "ValidationResult",
    "Validator",
    "new_validator",
    "format_results",
    "SchemaBridgeError",
    "SchemaLoadError",
    "SchemaReadError",
    "SchemaCompileError",
    "DefinitionNotFoundError",
    "InputError",
    "InputReadError",
    "InputContractError",
    "UnsupportedFormatError",
    "DefinitionResolutionError",
]
