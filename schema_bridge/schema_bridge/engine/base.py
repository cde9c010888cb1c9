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

"""Capability interface of a schema/constraint engine.

The pipeline only talks to an engine through these classes, so any backend
that can compile a schema, look up a definition, unify it with a document and
report composite errors can be plugged in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional, Sequence


class Position(NamedTuple):
    """1-based source position; 0 means unknown."""

    line: int
    column: int


class EngineError(Exception):
    """A single engine diagnostic with optional position and path metadata."""

    kind = "leaf"

    def __init__(
        self,
        message: str,
        path: Optional[Sequence[str]] = None,
        positions: Optional[Sequence[Position]] = None,
    ):
        super().__init__(message)
        self.message = message
        self._path = list(path or [])
        self._positions = list(positions or [])

    def path(self) -> List[str]:
        return list(self._path)

    def positions(self) -> List[Position]:
        return list(self._positions)

    def __str__(self) -> str:
        return self.message


class EngineErrorList(EngineError):
    """Several engine errors reported together, in engine order."""

    kind = "composite"

    def __init__(self, errors: Sequence[EngineError]):
        self._errors = list(errors)
        super().__init__("\n".join(str(e) for e in self._errors))

    def errors(self) -> List[EngineError]:
        return list(self._errors)

    def path(self) -> List[str]:
        return []

    def positions(self) -> List[Position]:
        return []


class EngineCompileError(EngineError):
    """Raised when schema text does not compile."""


class EngineSyntaxError(EngineError):
    """Raised when a data document is not well-formed JSON/YAML."""


class EngineValue(ABC):
    """A value owned by an evaluation context."""

    @property
    @abstractmethod
    def exists(self) -> bool:
        """Whether the value resolved to something."""


class EvaluationContext(ABC):
    """Compiles schemas, parses documents and checks them against each other."""

    @abstractmethod
    def compile(self, text: str, filename: str) -> EngineValue:
        """Compile schema text. Raises EngineCompileError."""

    @abstractmethod
    def lookup(self, value: EngineValue, path: str) -> EngineValue:
        """Resolve a definition path; the result may not exist."""

    @abstractmethod
    def unify(self, schema: EngineValue, document: EngineValue) -> EngineValue:
        """Combine a schema definition with a document. Never fails eagerly."""

    @abstractmethod
    def check_concrete(self, value: EngineValue) -> Optional[EngineError]:
        """Return None if ``value`` is fully concrete and valid, else the error."""

    @abstractmethod
    def parse_json(self, data: bytes, filename: str) -> EngineValue:
        """Parse JSON bytes. Raises EngineSyntaxError."""

    @abstractmethod
    def parse_yaml(self, data: bytes, filename: str) -> EngineValue:
        """Parse YAML bytes. Raises EngineSyntaxError."""


class SchemaEngine(ABC):
    """Factory for independent evaluation contexts."""

    name: str = "engine"

    @abstractmethod
    def new_context(self) -> EvaluationContext:
        """Create a fresh context; contexts never share state."""
