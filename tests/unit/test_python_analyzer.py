import ast
from pathlib import Path

import pytest

from buildable.analyzers import PythonDeclarationAnalyzer
from buildable.analyzers.python import annotation_to_type_text, module_name


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _annotation(text: str) -> ast.expr:
    return ast.parse(text, mode="eval").body


def test_ana_401_analyzer_reports_qualifiers_preconditions_and_fields(tmp_path: Path) -> None:
    _write_file(
        tmp_path / "pkg" / "records.py",
        "\n".join(
            [
                "from dataclasses import dataclass",
                "import buildable",
                "",
                "@buildable.gen_buildable",
                "@dataclass(frozen=True)",
                "class Top:",
                "    name: str",
                "    tags: dict[str, list[int]] | None",
                "",
                "class Outer:",
                "    class Inner:",
                "        @gen_buildable()",
                "        @dataclass",
                "        class Deep:",
                "            value: 'Optional[int]'",
                "",
                "@gen_buildable",
                "class Plain:",
                "    value: int",
            ]
        ),
    )

    declarations, errors = PythonDeclarationAnalyzer().analyze(tmp_path)

    assert errors == []
    by_name = {declaration.fully_qualified_name: declaration for declaration in declarations}
    assert sorted(by_name) == ["pkg.records.Outer.Inner.Deep", "pkg.records.Plain", "pkg.records.Top"]

    top = by_name["pkg.records.Top"]
    assert top.is_record_type is True
    assert top.has_companion_scope is True
    assert top.enclosing_scope_chain == ()
    assert [(field.name, field.raw_type_text) for field in top.fields or ()] == [
        ("name", "str"),
        ("tags", "dict<str, list<int>>?"),
    ]
    assert top.location is not None
    assert (top.location.file_path, top.location.line) == ("pkg/records.py", 6)

    deep = by_name["pkg.records.Outer.Inner.Deep"]
    assert deep.enclosing_scope_chain == ("Outer", "Inner")
    assert [field.raw_type_text for field in deep.fields or ()] == ["int?"]

    assert by_name["pkg.records.Plain"].is_record_type is False


def test_ana_402_records_inside_functions_lack_a_static_scope(tmp_path: Path) -> None:
    _write_file(
        tmp_path / "local.py",
        "\n".join(
            [
                "def make():",
                "    @gen_buildable",
                "    @dataclass",
                "    class Local:",
                "        value: int",
                "    return Local",
            ]
        ),
    )

    (declaration,), _ = PythonDeclarationAnalyzer().analyze(tmp_path)

    assert declaration.fully_qualified_name == "local.make.Local"
    assert declaration.is_record_type is True
    assert declaration.has_companion_scope is False


def test_ana_403_analyzer_skips_classvars_and_methods(tmp_path: Path) -> None:
    _write_file(
        tmp_path / "m.py",
        "\n".join(
            [
                "@gen_buildable",
                "@dataclass",
                "class Counter:",
                "    total: ClassVar[int] = 0",
                "    limit: typing.ClassVar[int] = 3",
                "    value: int = 0",
                "    def bump(self) -> int:",
                "        local: int = 1",
                "        return local",
            ]
        ),
    )

    (declaration,), _ = PythonDeclarationAnalyzer().analyze(tmp_path)

    assert [field.name for field in declaration.fields or ()] == ["value"]


def test_ana_404_analyzer_is_best_effort_when_one_file_fails(tmp_path: Path) -> None:
    _write_file(tmp_path / "ok.py", "@gen_buildable\n@dataclass\nclass Ok:\n    x: int\n")
    _write_file(tmp_path / "broken.py", "class Broken(:\n    pass\n")

    declarations, errors = PythonDeclarationAnalyzer().analyze(tmp_path)

    assert [declaration.fully_qualified_name for declaration in declarations] == ["ok.Ok"]
    assert len(errors) == 1
    assert errors[0].file_path == "broken.py"


def test_ana_405_analyzer_honours_gitignore_and_exclude_patterns(tmp_path: Path) -> None:
    record = "@gen_buildable\n@dataclass\nclass R:\n    x: int\n"
    _write_file(tmp_path / ".gitignore", "build/\n")
    _write_file(tmp_path / "build" / "copy.py", record)
    _write_file(tmp_path / "vendor" / ".gitignore", "skipped.py\n")
    _write_file(tmp_path / "vendor" / "skipped.py", record)
    _write_file(tmp_path / "vendor" / "kept.py", record)
    _write_file(tmp_path / "generated" / "out.py", record)
    _write_file(tmp_path / "src.py", record)

    declarations, _ = PythonDeclarationAnalyzer(exclude=("generated/",)).analyze(tmp_path)

    assert sorted(declaration.fully_qualified_name for declaration in declarations) == [
        "src.R",
        "vendor.kept.R",
    ]


def test_ana_406_custom_annotation_name(tmp_path: Path) -> None:
    _write_file(tmp_path / "m.py", "@buildable_record\n@dataclass\nclass R:\n    x: int\n")

    declarations, _ = PythonDeclarationAnalyzer(annotation_name="buildable_record").analyze(tmp_path)

    assert [declaration.name for declaration in declarations] == ["R"]


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        ("int", "int"),
        ("int | None", "int?"),
        ("None | int", "int?"),
        ("Optional[str]", "str?"),
        ("typing.Optional[str]", "str?"),
        ("dict[str, int]", "dict<str, int>"),
        ("list[tuple[float, int]]", "list<tuple<float, int>>"),
        ("'Map[int, str] | None'", "Map<int, str>?"),
        ("Optional[int] | None", "int?"),
        ("int | str", "int | str"),
    ],
)
def test_ana_407_annotations_translate_to_type_expression_text(
    annotation: str, expected: str
) -> None:
    assert annotation_to_type_text(_annotation(annotation)) == expected


def test_ana_408_module_names_follow_package_layout() -> None:
    assert module_name(Path("pkg/sub/mod.py")) == "pkg.sub.mod"
    assert module_name(Path("pkg/__init__.py")) == "pkg"


@pytest.mark.parametrize(
    ("record_lines", "reason"),
    [
        (["class Child(Base):", "    y: int"], "inherits from Base"),
        (["class Counted:", "    x: int", "    total: int = field(init=False)"], "init=False"),
        (["class Seeded:", "    x: int", "    seed: InitVar[int]"], "InitVar"),
    ],
)
def test_ana_409_records_whose_constructor_is_not_their_own_fields_are_rejected(
    tmp_path: Path, record_lines: list[str], reason: str
) -> None:
    _write_file(
        tmp_path / "m.py",
        "\n".join(
            [
                "@dataclass",
                "class Base:",
                "    x: int",
                "",
                "@gen_buildable",
                "@dataclass",
                *record_lines,
            ]
        ),
    )

    declarations, errors = PythonDeclarationAnalyzer().analyze(tmp_path)

    assert declarations == []
    (error,) = errors
    assert error.file_path == "m.py"
    assert reason in error.message
    assert error.message.startswith("m.py:7:1: ")


def test_ana_410_generic_and_object_bases_are_accepted(tmp_path: Path) -> None:
    _write_file(
        tmp_path / "m.py",
        "\n".join(
            [
                "@gen_buildable",
                "@dataclass",
                "class Box(Generic[T]):",
                "    item: T",
                "    label: str = field(default='')",
                "",
                "@gen_buildable",
                "@dataclass",
                "class Plain(object):",
                "    value: int",
            ]
        ),
    )

    declarations, errors = PythonDeclarationAnalyzer().analyze(tmp_path)

    assert errors == []
    assert [declaration.name for declaration in declarations] == ["Box", "Plain"]
