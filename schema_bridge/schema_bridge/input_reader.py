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

"""Read the raw bytes of a ValidationInput."""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from .exceptions import InputContractError, InputReadError
from .models import InputSourceType, ValidationInput

logger = logging.getLogger(__name__)


def read_input(validation_input: ValidationInput) -> bytes:
    """Return the full content of the input source.

    Raises:
        InputContractError: If the payload for the selected source is absent.
        InputReadError: If the underlying read fails.
    """
    source_type = validation_input.source_type
    if source_type is InputSourceType.FILE:
        return read_from_file(validation_input.file_path)
    if source_type is InputSourceType.STREAM:
        return read_from_stream(validation_input.stream)
    if source_type is InputSourceType.BYTES:
        return read_from_bytes(validation_input.data)
    raise InputContractError(f"unknown source type: {source_type!r}")


def read_from_file(file_path: Optional[Union[str, Path]]) -> bytes:
    if file_path is None:
        raise InputContractError("file path is None")

    path = Path(file_path)
    logger.debug(f"Reading input file: {path}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InputReadError(f"reading file {path}: {exc}") from exc


def read_from_stream(stream: Any) -> bytes:
    if stream is None:
        raise InputContractError("stream is None")

    try:
        data = stream.read()
    except (OSError, ValueError) as exc:
        # ValueError: closed stream or undecodable text
        raise InputReadError(f"reading from stream: {exc}") from exc

    if isinstance(data, str):
        return data.encode("utf-8")
    if data is None:
        # non-blocking streams return None when nothing is available
        raise InputReadError("reading from stream: no data available")
    return bytes(data)


def read_from_bytes(data: Any) -> bytes:
    if data is None:
        raise InputContractError("data is None")
    if isinstance(data, bytes):
        return data
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise InputContractError(f"data must be bytes-like, got {type(data).__name__}")
