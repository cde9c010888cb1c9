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

"""Turn document bytes into an engine value."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .engine.base import EngineSyntaxError, EngineValue, EvaluationContext
from .exceptions import UnsupportedFormatError
from .models import DataFormat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParseOutcome:
    """Either a parsed value or the syntax error that prevented it."""

    value: Optional[EngineValue] = None
    error: Optional[EngineSyntaxError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return self.error.message if self.error is not None else ""


def _coerce_format(fmt: Any) -> DataFormat:
    if isinstance(fmt, DataFormat):
        return fmt
    if isinstance(fmt, str):
        try:
            return DataFormat(fmt.lower())
        except ValueError:
            pass
    raise UnsupportedFormatError(f"unsupported format: {fmt!r}")


def parse_document(context: EvaluationContext, data: bytes, fmt: Any, name: str) -> ParseOutcome:
    """Parse ``data`` as ``fmt``.

    Malformed documents are returned as a failed ParseOutcome; only an unknown
    format raises (UnsupportedFormatError).
    """
    fmt = _coerce_format(fmt)

    if fmt is DataFormat.JSON:
        label, parse = "JSON", context.parse_json
    else:
        label, parse = "YAML", context.parse_yaml

    try:
        value = parse(data, name)
    except EngineSyntaxError as exc:
        logger.debug(f"Failed to parse {name} as {label}: {exc}")
        return ParseOutcome(error=EngineSyntaxError(f"parsing {label}: {exc}", positions=exc.positions()))

    return ParseOutcome(value=value)
