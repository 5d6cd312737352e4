import io
import json
import re
from pathlib import Path

from cli.buildable_cli import run


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


RECORDS = "\n".join(
    [
        "from dataclasses import dataclass",
        "",
        "@gen_buildable",
        "@dataclass(frozen=True)",
        "class Order:",
        "    order_id: int",
        "    note: str | None",
        "",
        "@gen_buildable",
        "class Loose:",
        "    value: int",
    ]
)


def test_cli_601_generate_writes_modules_and_prints_json(tmp_path: Path) -> None:
    _write_file(tmp_path / "app" / "shop" / "orders.py", RECORDS)
    output_root = tmp_path / "out"
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "generate",
            "--path",
            str(tmp_path / "app"),
            "--output-root",
            str(output_root),
            "--format",
            "json",
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    payload = json.loads(stdout.getvalue())
    assert payload["artifacts"] == [
        {
            "declarations": 9,
            "partial_type": "PartialOrder",
            "record": "shop.orders.Order",
            "target_file": "shop/orders/Order_buildable.py",
        }
    ]
    assert payload["diagnostics"][0]["severity"] == "warning"
    assert payload["diagnostics"][0]["location"] == "shop/orders.py:10:1"
    assert (output_root / "shop" / "orders" / "Order_buildable.py").is_file()
    assert "warning: shop/orders.py:10:1:" in stderr.getvalue()


def test_cli_602_dry_run_prints_table_without_writing(tmp_path: Path) -> None:
    _write_file(tmp_path / "app" / "orders.py", RECORDS)
    output_root = tmp_path / "out"
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["generate", "--path", str(tmp_path / "app"), "--output-root", str(output_root), "--dry-run"],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert not output_root.exists()
    output = _strip_ansi(stdout.getvalue())
    assert "Partial" in output
    assert "Order" in output


def test_cli_603_manifest_with_malformed_type_exits_with_error(tmp_path: Path) -> None:
    manifest = tmp_path / "manifest.json"
    manifest.write_text(
        json.dumps(
            {
                "declarations": [
                    {
                        "is_record_type": True,
                        "has_companion_scope": True,
                        "fully_qualified_name": "com.example.Bad",
                        "fields": [{"name": "value", "raw_type_text": "Map<Int"}],
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    stderr = io.StringIO()

    exit_code = run(
        ["generate", "--manifest", str(manifest), "--dry-run"],
        stdout=io.StringIO(),
        stderr=stderr,
    )

    assert exit_code == 1
    assert stderr.getvalue().startswith("error: ")
    assert "'value'" in stderr.getvalue()


def test_cli_604_usage_errors_exit_with_two(tmp_path: Path) -> None:
    stderr = io.StringIO()

    assert run(["generate"], stdout=io.StringIO(), stderr=io.StringIO()) == 2
    assert (
        run(["generate", "--path", str(tmp_path / "missing")], stdout=io.StringIO(), stderr=stderr)
        == 2
    )
    assert "Path does not exist" in stderr.getvalue()
