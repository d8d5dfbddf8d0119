"""Tests for data mapping, text parsers and component binding."""

from datetime import datetime, timezone

import pytest

from pagecraft.binding import (
    apply_mapping,
    bind_data_source,
    dangling_bindings,
    extract_paths,
    find_data_source,
    generate_mapping,
    get_value,
    parse_csv,
    parse_xml,
    resolve_component_data,
    set_value,
    transform_data,
    transform_value,
    unbind_data_source,
)
from pagecraft.tree import Component, DataMapping, DataSource


# ============================================================================
# Paths
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize("path", ["user.items[0].title", "user.items.0.title"])
def test_get_value_index_forms(path):
    data = {"user": {"items": [{"title": "First"}, {"title": "Second"}]}}
    assert get_value(data, path) == "First"


@pytest.mark.unit
def test_get_value_missing_returns_default():
    data = {"user": {"items": []}}

    assert get_value(data, "user.items[0].title") is None
    assert get_value(data, "user.name", "anon") == "anon"
    assert get_value("scalar", "a.b", 0) == 0


@pytest.mark.unit
def test_get_value_keeps_falsy_values():
    assert get_value({"count": 0, "flag": False}, "count", 99) == 0
    assert get_value({"count": 0, "flag": False}, "flag", True) is False


@pytest.mark.unit
def test_set_value_creates_objects():
    target = {}
    set_value(target, "profile.contact.email", "ada@example.com")
    set_value(target, "profile.name", "Ada")

    assert target == {"profile": {"contact": {"email": "ada@example.com"}, "name": "Ada"}}


@pytest.mark.unit
@pytest.mark.parametrize("path", ["", "a..b", ".a"])
def test_set_value_rejects_bad_paths(path):
    with pytest.raises(ValueError):
        set_value({}, path, 1)


@pytest.mark.unit
def test_set_value_refuses_non_object_segment():
    with pytest.raises(ValueError):
        set_value({"a": "text"}, "a.b", 1)


@pytest.mark.unit
def test_extract_paths():
    data = {"user": {"name": "Ada", "tags": ["x"]}, "items": [{"id": 1}], "empty": {}}

    assert extract_paths(data) == ["user.name", "user.tags[0]", "items[0].id", "empty"]


# ============================================================================
# Transforms
# ============================================================================

@pytest.mark.unit
@pytest.mark.parametrize(
    "value,transform,expected",
    [
        (42, "string", "42"),
        (True, "string", "true"),
        ({"a": 1}, "string", '{"a":1}'),
        ("36", "number", 36),
        ("3.5", "number", 3.5),
        ("-2", "number", -2),
        (7, "number", 7),
        ("true", "boolean", True),
        ("1", "boolean", True),
        ("yes", "boolean", False),
        (0, "boolean", False),
        ('{"a": [1]}', "json", {"a": [1]}),
        ("unchanged", None, "unchanged"),
    ],
)
def test_transform_value(value, transform, expected):
    assert transform_value(value, transform) == expected


@pytest.mark.unit
def test_transform_failures_use_default():
    assert transform_value("abc", "number", -1) == -1
    assert transform_value("nan", "number", -1) == -1
    assert transform_value("{bad", "json", {}) == {}
    assert transform_value("not a date", "date", None) is None
    assert transform_value(None, "string", "fallback") == "fallback"


@pytest.mark.unit
def test_transform_dates():
    assert transform_value(0, "date") == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert transform_value("2024-01-02", "date") == datetime(2024, 1, 2)


@pytest.mark.unit
def test_transform_data():
    assert transform_data("42", {"type": "number"}) == 42
    assert transform_data("abc", {"type": "number"}) == "abc"
    assert transform_data("abc", "not-rules") == "abc"


# ============================================================================
# Mapping
# ============================================================================

@pytest.mark.unit
def test_generate_mapping_walks_nested_objects():
    source = [{"user": {"name": "Ada", "age": 36}, "title": "Dr"}]
    target = {"user": {"name": ""}, "title": "", "subtitle": ""}

    mappings = generate_mapping(source, target)

    assert [m.source_path for m in mappings] == ["user.name", "title", "subtitle"]
    assert all(m.source_path == m.target_path for m in mappings)
    assert mappings[0].field == "name"


@pytest.mark.unit
def test_generate_mapping_empty_inputs():
    # Target keys are proposed even without a source sample
    assert [m.target_path for m in generate_mapping([], {"a": 1})] == ["a"]
    assert generate_mapping({"a": 1}, "scalar") == []


@pytest.mark.unit
def test_apply_mapping_with_transform_and_default():
    mappings = [
        {"sourcePath": "age", "targetPath": "profile.age", "transform": "number"},
        {"sourcePath": "nickname", "targetPath": "nick", "defaultValue": "anon"},
        DataMapping(source_path="tags[1]", target_path="second"),
    ]

    result = apply_mapping({"age": "36", "tags": ["a", "b"]}, mappings)

    assert result == {"profile": {"age": 36}, "nick": "anon", "second": "b"}


@pytest.mark.unit
def test_apply_mapping_conflicting_targets():
    mappings = [
        {"sourcePath": "a", "targetPath": "out"},
        {"sourcePath": "b", "targetPath": "out.nested"},
    ]
    with pytest.raises(ValueError):
        apply_mapping({"a": 1, "b": 2}, mappings)


# ============================================================================
# Parsers
# ============================================================================

@pytest.mark.unit
def test_parse_csv():
    rows = parse_csv("name,age\nAda,36\nGrace,45\n")
    assert rows == [{"name": "Ada", "age": "36"}, {"name": "Grace", "age": "45"}]


@pytest.mark.unit
def test_parse_csv_ragged_rows():
    assert parse_csv("a,b\n1,2,3\n4\n") == [{"a": "1", "b": "2"}, {"a": "4"}]


@pytest.mark.unit
def test_parse_csv_quoted_fields():
    assert parse_csv('title,body\n"Hello, world","line"\n') == [{"title": "Hello, world", "body": "line"}]


@pytest.mark.unit
def test_parse_csv_empty():
    assert parse_csv("") == []


@pytest.mark.unit
def test_parse_csv_unterminated_quote():
    with pytest.raises(ValueError):
        parse_csv('a,b\n"open,2\n')


@pytest.mark.unit
def test_parse_xml_repeated_elements():
    text = '<users><user id="1"><name>Ada</name></user><user id="2"><name>Bob</name></user></users>'

    assert parse_xml(text) == {
        "users": {"user": [{"id": "1", "name": "Ada"}, {"id": "2", "name": "Bob"}]}
    }


@pytest.mark.unit
def test_parse_xml_text_and_attributes():
    assert parse_xml('<p class="lead">Hi</p>') == {"p": {"class": "lead", "_text": "Hi"}}
    assert parse_xml("<empty/>") == {"empty": {}}


@pytest.mark.unit
def test_parse_xml_malformed():
    with pytest.raises(ValueError, match="XML parse error"):
        parse_xml("<a><b></a>")


# ============================================================================
# Binding
# ============================================================================

@pytest.fixture
def sources():
    return (
        DataSource(id="users", name="Users", type="static", data=[{"name": "Ada"}, {"name": "Bob"}]),
        DataSource(id="stats", name="Stats", type="api", data={"total": "12"}),
    )


@pytest.mark.unit
def test_bind_and_resolve_rows(sources):
    table = bind_data_source(
        Component(id="t", type="data-table"),
        "users",
        [DataMapping(source_path="name", target_path="title")],
    )

    assert table.data_source == "users"
    assert resolve_component_data(table, sources) == [{"title": "Ada"}, {"title": "Bob"}]


@pytest.mark.unit
def test_resolve_single_object(sources):
    text = bind_data_source(
        Component(id="x", type="text"),
        "stats",
        [DataMapping(source_path="total", target_path="content", transform="number")],
    )
    assert resolve_component_data(text, sources) == {"content": 12}


@pytest.mark.unit
def test_resolve_without_mappings_returns_source_data(sources):
    chart = bind_data_source(Component(id="c", type="bar-chart"), "stats")
    assert resolve_component_data(chart, sources) == {"total": "12"}


@pytest.mark.unit
def test_unbound_and_dangling(sources):
    plain = Component(id="p", type="text")
    dangling = bind_data_source(plain, "deleted")

    assert resolve_component_data(plain, sources) is None
    assert resolve_component_data(dangling, sources) is None
    assert dangling_bindings([plain, dangling], sources) == ["p"]

    unbound = unbind_data_source(dangling)
    assert unbound.data_source is None
    assert unbound.data_mapping is None


@pytest.mark.unit
def test_find_data_source(sources):
    assert find_data_source(sources, "stats").name == "Stats"
    assert find_data_source(sources, "missing") is None
