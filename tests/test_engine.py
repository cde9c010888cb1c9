"""Tests for the JSON Schema engine and source maps."""

from __future__ import annotations

import json

import pytest

from schema_bridge.engine import EngineCompileError, EngineErrorList, EngineSyntaxError, JsonSchemaEngine, Position
from schema_bridge.engine.source_map import build_json_source_map, build_source_map, positions_for, to_pointer

SCHEMA = {
    "$defs": {
        "Config": {
            "type": "object",
            "properties": {
                "owner": {"$ref": "#/$defs/Person"},
                "contact": {"type": "string", "format": "email"},
            },
        },
        "Person": {
            "type": "object",
            "properties": {"age": {"type": "integer", "minimum": 0}},
        },
        "a/b": {"type": "string"},
    },
    "properties": {"top": {"type": "boolean"}},
}


@pytest.fixture
def context():
    return JsonSchemaEngine().new_context()


@pytest.fixture
def schema(context, tmp_path):
    return context.compile(json.dumps(SCHEMA), filename=str(tmp_path / "schema.json"))


def _check(context, schema, definition: str, document: bytes):
    value = context.unify(context.lookup(schema, definition), context.parse_yaml(document, "doc.yaml"))
    return context.check_concrete(value)


class TestSourceMap:
    """Tests for build_source_map and positions_for."""

    def test_yaml_positions(self) -> None:
        source_map = build_source_map("name: app\nspec:\n  items:\n    - a\n    - b\n")

        assert source_map[""] == Position(1, 1)
        assert source_map["/name"] == Position(1, 7)
        assert source_map["/spec/items/1"] == Position(5, 7)

    def test_json_positions(self) -> None:
        source_map = build_source_map('{\n  "a": {\n    "b": 1\n  }\n}')

        assert source_map["/a/b"].line == 3

    def test_keys_are_pointer_escaped(self) -> None:
        source_map = build_source_map("a/b: 1\nc~d: 2\n")

        assert "/a~1b" in source_map
        assert "/c~0d" in source_map

    def test_unparseable_content_gives_empty_map(self) -> None:
        assert build_source_map("a: [unclosed") == {}

    def test_empty_content(self) -> None:
        assert build_source_map("") == {}

    def test_tab_indented_json(self) -> None:
        content = b'{\n\t"a": {\n\t\t"b": 1\n\t}\n}'

        assert build_json_source_map(content)["/a/b"] == Position(3, 8)

    def test_non_string_keys_are_recorded_as_written(self) -> None:
        source_map = build_source_map("200: ok\ntrue: y\n")

        assert source_map["/200"] == Position(1, 6)
        assert source_map["/true"] == Position(2, 7)

    def test_recursive_alias_gives_empty_map(self) -> None:
        assert build_source_map("items: &x [1, *x]\n") == {}

    def test_positions_for_walks_up_to_root(self) -> None:
        source_map = {"": Position(1, 1), "/spec": Position(2, 3)}

        assert positions_for(source_map, ["spec", "replicas"]) == [Position(2, 3), Position(1, 1)]

    def test_to_pointer(self) -> None:
        assert to_pointer(["ports", 0, "a/b"]) == "/ports/0/a~1b"
        assert to_pointer([]) == ""


class TestCompileAndLookup:
    """Tests for compile and definition lookup."""

    def test_compile_rejects_invalid_schema(self, context) -> None:
        with pytest.raises(EngineCompileError):
            context.compile('{"type": "no-such-type"}', filename="bad.json")

    @pytest.mark.parametrize(
        ("path", "exists"),
        [
            ("#Config", True),
            ("#Person", True),
            ("#Missing", False),
            ("#Config.owner", True),
            ("#Config.nope", False),
            ("top", True),
            ("#/$defs/Person/properties/age", True),
            ("/$defs/Person", True),
            ("#a/b", True),
            ("", True),
        ],
    )
    def test_lookup(self, context, schema, path: str, exists: bool) -> None:
        assert context.lookup(schema, path).exists is exists

    def test_lookup_keeps_definition_path(self, context, schema) -> None:
        assert context.lookup(schema, "#Config.owner").definition_path == ("#Config", "owner")


class TestCheckConcrete:
    """Tests for check_concrete."""

    def test_valid_document(self, context, schema) -> None:
        assert _check(context, schema, "#Config", b"owner:\n  age: 3\n") is None

    def test_refs_resolve_against_whole_schema(self, context, schema) -> None:
        error = _check(context, schema, "#Config", b"owner:\n  age: -1\n")

        assert isinstance(error, EngineErrorList)
        (violation,) = error.errors()
        assert violation.path() == ["#Config", "owner", "age"]
        assert violation.positions()[0] == Position(2, 8)
        assert violation.keyword == "minimum"

    def test_format_is_checked(self, context, schema) -> None:
        error = _check(context, schema, "#Config", b"contact: nobody\n")

        assert error is not None
        assert "email" in str(error)

    def test_index_and_quoted_segments(self, context, tmp_path) -> None:
        schema = context.compile(
            json.dumps({"$defs": {"List": {"type": "array", "items": {"properties": {"a-b": {"type": "string"}}}}}}),
            filename=str(tmp_path / "list.json"),
        )
        value = context.unify(context.lookup(schema, "#List"), context.parse_json(b'[{"a-b": "x"}, {"a-b": 2}]', "l"))

        (violation,) = context.check_concrete(value).errors()

        assert violation.path() == ["#List", "[1]", '"a-b"']

    def test_non_ascii_and_quote_segments_are_not_escaped(self, context, tmp_path) -> None:
        schema = context.compile(
            "$defs:\n  Config:\n    properties:\n      größe: {type: integer}\n      'say\"hi': {type: integer}\n",
            filename=str(tmp_path / "names.yaml"),
        )
        document = context.parse_yaml("größe: x\n'say\"hi': y\n".encode("utf-8"), "d.yaml")

        error = context.check_concrete(context.unify(context.lookup(schema, "#Config"), document))

        assert [v.path() for v in error.errors()] == [["#Config", '"größe"'], ["#Config", '"say"hi"']]

    def test_draft7_schema(self, context, tmp_path) -> None:
        schema = context.compile(
            json.dumps(
                {
                    "$schema": "http://json-schema.org/draft-07/schema#",
                    "definitions": {
                        "Config": {"type": "object", "properties": {"n": {"$ref": "#/definitions/Count"}}},
                        "Count": {"type": "integer"},
                    },
                }
            ),
            filename=str(tmp_path / "draft7.json"),
        )
        value = context.unify(context.lookup(schema, "#Config"), context.parse_yaml(b"n: many\n", "d.yaml"))

        error = context.check_concrete(value)

        assert error is not None
        assert error.errors()[0].path() == ["#Config", "n"]

    def test_missing_definition_reports_error(self, context, schema) -> None:
        value = context.unify(context.lookup(schema, "#Missing"), context.parse_yaml(b"{}", "d.yaml"))

        assert context.check_concrete(value) is not None


class TestParsers:
    """Tests for parse_json and parse_yaml."""

    def test_json_syntax_error_position(self, context) -> None:
        with pytest.raises(EngineSyntaxError) as exc_info:
            context.parse_json(b'{"a": 1,}', "bad.json")

        assert exc_info.value.positions() == [Position(1, 9)]
        assert str(exc_info.value).startswith("bad.json:1:9:")

    def test_json_invalid_encoding(self, context) -> None:
        with pytest.raises(EngineSyntaxError):
            context.parse_json(b'{"a": "\xff"}', "bad.json")

    def test_yaml_syntax_error_position(self, context) -> None:
        with pytest.raises(EngineSyntaxError) as exc_info:
            context.parse_yaml(b"a: 1\nb: [2\n", "bad.yaml")

        assert exc_info.value.positions()
        assert exc_info.value.positions()[0].line >= 2

    def test_yaml_multiple_documents_are_rejected(self, context) -> None:
        with pytest.raises(EngineSyntaxError):
            context.parse_yaml(b"a: 1\n---\nb: 2\n", "multi.yaml")

    def test_yaml_keys_are_strings(self, context) -> None:
        document = context.parse_yaml(b"1: x\ntrue: y\n200: ok\n'q': z\n", "keys.yaml")

        assert document.data == {"1": "x", "true": "y", "200": "ok", "q": "z"}

    def test_yaml_timestamps_stay_strings(self, context) -> None:
        assert context.parse_yaml(b"released: 2024-01-02\n", "d.yaml").data == {"released": "2024-01-02"}

    def test_yaml_aliases_and_merge_keys(self, context) -> None:
        content = b"base: &b {x: 1}\ncopy: *b\nderived:\n  <<: *b\n  y: 2\n"

        data = context.parse_yaml(content, "d.yaml").data

        assert data["copy"] == {"x": 1}
        assert data["derived"] == {"x": 1, "y": 2}

    @pytest.mark.parametrize(
        "content",
        [
            b"items: &x [1, *x]\n",
            b"node: &n\n  child: *n\n",
            b"outer: &o\n  - inner: [*o]\n",
        ],
    )
    def test_yaml_recursive_alias_is_rejected(self, context, content: bytes) -> None:
        with pytest.raises(EngineSyntaxError, match="recursive alias"):
            context.parse_yaml(content, "loop.yaml")

    def test_yaml_non_scalar_key_is_rejected(self, context) -> None:
        with pytest.raises(EngineSyntaxError, match="non-scalar mapping key"):
            context.parse_yaml(b"? [a, b]\n: x\n", "complex.yaml")

    def test_tab_indented_json_has_positions(self, context) -> None:
        document = context.parse_json(b'{\n\t"name": 5\n}', "tabs.json")

        assert document.source_map["/name"] == Position(2, 10)
