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

"""Convert engine errors into ValidationError records.

Works on anything shaped like an engine error: composite errors expose
``errors()``, leaf errors expose ``positions()`` and ``path()``. Missing or
broken metadata degrades to line 0 / empty path instead of raising.
"""

import logging
from typing import Any, Iterable, List, Sequence

from .models import ValidationError

logger = logging.getLogger(__name__)

DEFAULT_ROOT_MARKERS = ("#Config",)


def extract_validation_errors(
    err: BaseException,
    *,
    root_markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
    keep_index_segments: bool = False,
) -> List[ValidationError]:
    """Flatten ``err`` into one record per underlying error, in engine order."""
    sub_errors = _sub_errors(err)
    if not sub_errors:
        return [ValidationError(message=str(err))]

    return [
        extract_single_error(e, root_markers=root_markers, keep_index_segments=keep_index_segments)
        for e in sub_errors
    ]


def extract_single_error(
    err: Any,
    *,
    root_markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
    keep_index_segments: bool = False,
) -> ValidationError:
    return ValidationError(
        line=extract_line_number(err),
        column=extract_column_number(err),
        path=extract_field_path(err, root_markers=root_markers, keep_index_segments=keep_index_segments),
        message=str(err),
    )


def _sub_errors(err: Any) -> List[Any]:
    if getattr(err, "kind", None) == "composite":
        try:
            return list(err.errors())
        except Exception:
            logger.debug("Composite error without readable sub-errors", exc_info=True)
            return []
    if getattr(err, "kind", None) == "leaf":
        return [err]
    return []


def _positions(err: Any) -> List[Any]:
    try:
        return list(err.positions())
    except Exception:
        return []


def extract_line_number(err: Any) -> int:
    for pos in _positions(err):
        line = getattr(pos, "line", 0) or 0
        if line > 0:
            return line
    return 0


def extract_column_number(err: Any) -> int:
    for pos in _positions(err):
        column = getattr(pos, "column", 0) or 0
        if column > 0:
            return column
    return 0


def extract_field_path(
    err: Any,
    *,
    root_markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
    keep_index_segments: bool = False,
) -> str:
    try:
        path = list(err.path())
    except Exception:
        return ""
    if not path:
        return ""
    return format_path(path, root_markers=root_markers, keep_index_segments=keep_index_segments)


def format_path(
    path: Iterable[str],
    *,
    root_markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
    keep_index_segments: bool = False,
) -> str:
    """Join path segments with dots, dropping root markers and list indices.

    With ``keep_index_segments`` an index is attached to the segment before it,
    e.g. ``ports[1].name``.
    """
    parts: List[str] = []
    for segment in path:
        segment = str(segment)
        if not is_valid_path_element(segment, root_markers=root_markers, keep_index_segments=keep_index_segments):
            continue
        if segment.startswith("[") and parts:
            parts[-1] += segment
            continue
        parts.append(segment.strip('"'))
    return ".".join(parts)


def is_valid_path_element(
    segment: str,
    *,
    root_markers: Sequence[str] = DEFAULT_ROOT_MARKERS,
    keep_index_segments: bool = False,
) -> bool:
    if not segment or segment in root_markers:
        return False
    if segment.startswith("["):
        return keep_index_segments
    return True
