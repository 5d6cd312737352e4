"""Unit tests for the type expression parser."""

import pytest

from buildable.type_expr import (
    MalformedTypeExpression,
    TypeExpr,
    normalize_type_text,
    parse_type,
)


def test_typ_001_parses_base_type() -> None:
    assert parse_type("Int") == TypeExpr(name="Int", type_args=(), nullable=False)


def test_typ_002_parses_nullable_base_type() -> None:
    assert parse_type("Int?") == TypeExpr(name="Int", type_args=(), nullable=True)


def test_typ_003_parses_compound_type_with_space_after_comma() -> None:
    assert parse_type("Map<Int, String>") == TypeExpr(
        name="Map",
        type_args=(TypeExpr("Int"), TypeExpr("String")),
        nullable=False,
    )


def test_typ_004_nullable_binds_to_outer_compound_type() -> None:
    parsed = parse_type("List<Int>?")

    assert parsed.nullable is True
    assert parsed.type_args == (TypeExpr("Int"),)


def test_typ_005_type_arguments_carry_their_own_nullability() -> None:
    parsed = parse_type("Map<String?, List<Pair<Double, Int?>>>")

    assert parsed.nullable is False
    key, value = parsed.type_args
    assert key == TypeExpr("String", nullable=True)
    assert value.name == "List"
    pair = value.type_args[0]
    assert pair.type_args == (TypeExpr("Double"), TypeExpr("Int", nullable=True))


@pytest.mark.parametrize(
    "text",
    [
        "Map<Int,String>",
        "Map<Int ,String>",
        "Map<Int  ,  String>?",
        "List<Pair<Double,Int>>",
    ],
)
def test_typ_006_render_round_trips_up_to_comma_whitespace(text: str) -> None:
    assert parse_type(text).render() == normalize_type_text(text)
    assert str(parse_type(text)) == normalize_type_text(text)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "Map<Int, String",
        "Map<>",
        "List<Int>>",
        " Int",
        "Int ",
        "List< Int>",
        "List<Int >",
        "Int??",
        "Map<Int,,String>",
        "kotlin.String",
        "Int garbage",
    ],
)
def test_typ_007_rejects_text_outside_the_grammar(text: str) -> None:
    with pytest.raises(MalformedTypeExpression) as exc_info:
        parse_type(text)

    assert exc_info.value.text == text


def test_typ_008_as_nullable_only_marks_the_outer_level() -> None:
    parsed = parse_type("List<Int>")

    nullable = parsed.as_nullable()

    assert nullable.nullable is True
    assert nullable.type_args == (TypeExpr("Int"),)
    assert parsed.nullable is False
    assert nullable.as_nullable() is nullable


def test_typ_009_identifiers_are_case_sensitive_word_characters() -> None:
    assert parse_type("my_type_2") == TypeExpr("my_type_2")
    assert parse_type("int") != parse_type("Int")
