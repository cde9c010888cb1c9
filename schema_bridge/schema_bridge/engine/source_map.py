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

"""Map document paths to source line/column positions."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Union

import yaml

from .base import Position
from .yaml_loader import compose_document

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Position]


def json_pointer_escape(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def to_pointer(path: Iterable[Union[str, int]]) -> str:
    return "".join(f"/{json_pointer_escape(str(token))}" for token in path)


def build_source_map(content: Union[str, bytes]) -> SourceMap:
    """Build a mapping from JSON pointers to 1-based line/column.

    This uses PyYAML's node tree (yaml.compose) so locations are tracked without
    changing the data returned by the parser. JSON documents go through the same
    walk since the node tree of a JSON text is the same shape. Returns an empty
    map if the content cannot be composed; syntax errors are reported by the
    parser itself.
    """
    source_map: SourceMap = {}

    try:
        root = compose_document(content)
    except yaml.YAMLError as exc:
        logger.debug(f"No source map available: {exc}")
        return source_map

    if root is None:
        return source_map

    def _walk(node: yaml.Node, path: str) -> None:
        mark = node.start_mark
        # PyYAML uses 0-based line/column
        source_map[path] = Position(mark.line + 1, mark.column + 1)

        if isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                key = getattr(key_node, "value", None)
                if key is None or not isinstance(key, str):
                    continue
                _walk(value_node, f"{path}/{json_pointer_escape(key)}")
        elif isinstance(node, yaml.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, f"{path}/{idx}")

    _walk(root, "")
    return source_map


def build_json_source_map(content: Union[str, bytes]) -> SourceMap:
    """Source map for a JSON text.

    YAML does not allow tabs as indentation, but JSON strings cannot contain a
    raw tab, so every tab in valid JSON is whitespace and can be read as a space
    without moving any line or column.
    """
    if isinstance(content, bytes):
        content = content.replace(b"\t", b" ")
    else:
        content = content.replace("\t", " ")
    return build_source_map(content)


def positions_for(source_map: SourceMap, path: Iterable[Union[str, int]]) -> List[Position]:
    """Positions of ``path`` and each of its ancestors, deepest first."""
    tokens = list(path)
    positions: List[Position] = []
    for depth in range(len(tokens), -1, -1):
        pos = source_map.get(to_pointer(tokens[:depth]))
        if pos is not None:
            positions.append(pos)
    return positions
