import importlib.util
import sys
import textwrap
from collections.abc import Callable, Iterator
from pathlib import Path
from types import ModuleType

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

RECORD_PACKAGE = "shopfixture"

RECORD_SOURCE = textwrap.dedent(
    """
    from dataclasses import dataclass
    from typing import ClassVar, Optional

    from buildable import gen_buildable


    @gen_buildable
    @dataclass(frozen=True)
    class MyData:
        arg1: str
        arg2: int


    @gen_buildable
    @dataclass(frozen=True)
    class Test1:
        arg1: str
        arg2: int
        arg3: Optional[float]
        registry: ClassVar[int] = 0


    @gen_buildable
    @dataclass(frozen=True)
    class Empty:
        pass


    class Scope1:
        @gen_buildable
        @dataclass(frozen=True)
        class Nested:
            arg1: str
            arg2: int


    class Scope2:
        @gen_buildable
        @dataclass(frozen=True)
        class Nested:
            arg1: int
            arg2: list[tuple[float, int]]


    @gen_buildable
    class NotARecord:
        value: int


    def factory():
        @gen_buildable
        @dataclass
        class Local:
            value: int

        return Local
    """
)


@pytest.fixture(scope="session")
def record_project(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Path]:
    """Write an importable package of annotated records and put it on the path."""
    source_root = tmp_path_factory.mktemp("records")
    package_dir = source_root / RECORD_PACKAGE
    package_dir.mkdir()
    (package_dir / "__init__.py").write_text("", encoding="utf-8")
    (package_dir / "models.py").write_text(RECORD_SOURCE, encoding="utf-8")
    sys.path.insert(0, str(source_root))
    yield source_root
    sys.path.remove(str(source_root))


@pytest.fixture(scope="session")
def load_generated() -> Callable[[Path], ModuleType]:
    """Return a loader executing a generated module from its file path."""
    loaded: dict[Path, ModuleType] = {}

    def _load(path: Path) -> ModuleType:
        if path in loaded:
            return loaded[path]
        module_name = "generated_" + "_".join(path.with_suffix("").parts[-3:])
        spec = importlib.util.spec_from_file_location(module_name, path)
        assert spec is not None and spec.loader is not None
        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        spec.loader.exec_module(module)
        loaded[path] = module
        return module

    return _load
