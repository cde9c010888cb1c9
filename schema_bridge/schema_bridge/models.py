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

"""Data shapes passed through the validation pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, Dict, Iterable, Optional, Tuple, Union


class InputSourceType(Enum):
    """Where the bytes of a document come from."""

    FILE = "file"
    STREAM = "stream"
    BYTES = "bytes"


class DataFormat(Enum):
    """Declared syntax of a document."""

    JSON = "json"
    YAML = "yaml"

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> Optional["DataFormat"]:
        """Guess the format from a file extension, or None if unknown.

        The validation core never calls this; picking a format is up to the caller.
        """
        suffix = Path(path).suffix.lower()
        if suffix == ".json":
            return cls.JSON
        if suffix in (".yaml", ".yml"):
            return cls.YAML
        return None


@dataclass(frozen=True)
class ValidationInput:
    """A document to validate.

    Only the payload matching ``source_type`` is read: ``file_path`` for FILE,
    ``stream`` for STREAM and ``data`` for BYTES. ``name`` is a label echoed in
    the result.
    """

    source_type: InputSourceType
    name: str = ""
    format: DataFormat = DataFormat.YAML
    file_path: Optional[Union[str, Path]] = None
    stream: Optional[BinaryIO] = None
    data: Optional[bytes] = None

    @classmethod
    def from_file(
        cls, file_path: Union[str, Path], fmt: DataFormat, name: Optional[str] = None
    ) -> "ValidationInput":
        return cls(
            source_type=InputSourceType.FILE,
            name=name if name is not None else str(file_path),
            format=fmt,
            file_path=file_path,
        )

    @classmethod
    def from_stream(cls, stream: Optional[BinaryIO], fmt: DataFormat, name: str) -> "ValidationInput":
        return cls(source_type=InputSourceType.STREAM, name=name, format=fmt, stream=stream)

    @classmethod
    def from_bytes(cls, data: Optional[bytes], fmt: DataFormat, name: str) -> "ValidationInput":
        return cls(source_type=InputSourceType.BYTES, name=name, format=fmt, data=data)


@dataclass(frozen=True)
class ValidationError:
    """One problem found in a document.

    This is a plain record, not an exception. ``line`` and ``column`` are
    1-based with 0 meaning unknown; an empty ``path`` means the document root
    or an unknown location.
    """

    message: str
    line: int = 0
    column: int = 0
    path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "column": self.column,
            "path": self.path,
            "message": self.message,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one document."""

    name: str
    valid: bool
    errors: Tuple[ValidationError, ...] = field(default_factory=tuple)

    @classmethod
    def success(cls, name: str) -> "ValidationResult":
        return cls(name=name, valid=True, errors=())

    @classmethod
    def failure(cls, name: str, errors: Iterable[ValidationError]) -> "ValidationResult":
        errors = tuple(errors)
        if not errors:
            raise ValueError(f"failing result for {name!r} needs at least one error")
        return cls(name=name, valid=False, errors=errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
        }
