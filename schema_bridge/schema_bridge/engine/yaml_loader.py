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

"""YAML loader used for data documents.

Documents are read the way a JSON consumer sees them: mapping keys are always
strings (``1: x`` has the key ``"1"``), timestamps stay strings, and aliases
that point back into the collection being built are rejected.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import yaml
from yaml.composer import ComposerError
from yaml.constructor import ConstructorError

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class DocumentLoader(yaml.SafeLoader):
    """SafeLoader with string keys, string timestamps and no recursive aliases."""

    def __init__(self, stream: Any) -> None:
        super().__init__(stream)
        self._open_anchors: List[str] = []

    def compose_node(self, parent: Optional[yaml.Node], index: Any) -> yaml.Node:
        if self.check_event(yaml.AliasEvent):
            event = self.peek_event()
            if event.anchor in self._open_anchors:
                raise ComposerError(
                    None, None, f"found recursive alias {event.anchor!r}", event.start_mark
                )
        return super().compose_node(parent, index)

    def compose_sequence_node(self, anchor: Optional[str]) -> yaml.SequenceNode:
        return self._compose_collection(super().compose_sequence_node, anchor)

    def compose_mapping_node(self, anchor: Optional[str]) -> yaml.MappingNode:
        return self._compose_collection(super().compose_mapping_node, anchor)

    def _compose_collection(self, compose: Any, anchor: Optional[str]) -> Any:
        if anchor is None:
            return compose(anchor)
        self._open_anchors.append(anchor)
        try:
            return compose(anchor)
        finally:
            self._open_anchors.pop()

    def construct_mapping(self, node: yaml.MappingNode, deep: bool = False) -> Dict[str, Any]:
        if not isinstance(node, yaml.MappingNode):
            raise ConstructorError(
                None, None, f"expected a mapping node, but found {node.id}", node.start_mark
            )
        self.flatten_mapping(node)
        mapping: Dict[str, Any] = {}
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise ConstructorError(
                    "while constructing a mapping",
                    node.start_mark,
                    "found a non-scalar mapping key",
                    key_node.start_mark,
                )
            # the key as written, so it matches the source map
            mapping[key_node.value] = self.construct_object(value_node, deep=deep)
        return mapping


DocumentLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_document(content: Any) -> Any:
    return yaml.load(content, Loader=DocumentLoader)


def compose_document(content: Any) -> Optional[yaml.Node]:
    return yaml.compose(content, Loader=DocumentLoader)
