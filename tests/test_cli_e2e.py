import json
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def run_cli(args, db_path, input_data=None, expect_ok=True, raw=False):
    cmd = [sys.executable, "-m", "coa.cli", *args, "--db-path", str(db_path)]
    payload = json.dumps(input_data) if input_data is not None else None
    result = subprocess.run(
        cmd,
        input=payload,
        text=True,
        capture_output=True,
        cwd=ROOT,
    )
    if expect_ok:
        assert result.returncode == 0, result.stdout + result.stderr
    else:
        assert result.returncode != 0, result.stdout + result.stderr
    output = result.stdout.strip()
    if raw:
        return output
    return json.loads(output) if output else {}


def test_cli_account_flow(tmp_path):
    db_path = tmp_path / "coa.db"

    init = run_cli(["init"], db_path)
    assert init["accounts_loaded"] > 0
    again = run_cli(["init"], db_path)
    assert again["accounts_loaded"] == 0

    added = run_cli(
        ["account", "add"],
        db_path,
        input_data={"code": "1012", "description": "Caja Chica"},
    )
    assert added["account"]["level"] == 4
    assert added["account"]["accepts_movement"] is True

    duplicate = run_cli(
        ["account", "add"],
        db_path,
        input_data={"code": "1012", "description": "Otra"},
        expect_ok=False,
    )
    assert duplicate["code"] == "VALIDATION_FAILED"
    assert duplicate["details"]["issues"][0]["code"] == "DUPLICATE_CODE"

    denied = run_cli(["account", "toggle-movement", "10"], db_path, expect_ok=False)
    assert denied["code"] == "POLICY_VIOLATION"

    toggled = run_cli(["account", "toggle-movement", "1012"], db_path)
    assert toggled["account"]["accepts_movement"] is False

    run_cli(["account", "deactivate", "101"], db_path)
    shown = run_cli(["account", "show", "101"], db_path)
    assert shown["active"] is False

    active = run_cli(["account", "list", "--active-only", "--class", "1"], db_path)
    assert "101" not in [a["code"] for a in active["accounts"]]

    tree = run_cli(["tree", "--expand", "1", "--expand", "10", "--expand", "101"], db_path)
    codes = [row["code"] for row in tree["rows"]]
    assert codes[:4] == ["1", "10", "101", "1011"]
    assert tree["rows"][3]["depth"] == 3

    missing = run_cli(["account", "show", "999"], db_path, expect_ok=False)
    assert missing["code"] == "ACCOUNT_NOT_FOUND"


def test_cli_update_and_stats(tmp_path):
    db_path = tmp_path / "coa.db"
    run_cli(["init"], db_path)

    updated = run_cli(
        ["account", "update", "1011"],
        db_path,
        input_data={"description": "Caja General"},
    )
    assert updated["account"]["description"] == "Caja General"

    rejected = run_cli(
        ["account", "update", "1011"],
        db_path,
        input_data={"code": "1019"},
        expect_ok=False,
    )
    assert rejected["code"] == "POLICY_VIOLATION"

    stats = run_cli(["stats"], db_path)
    assert stats["total_accounts"] == stats["active_accounts"]
    assert stats["by_level"][0]["name"] == "Clase"


def test_cli_import_export(tmp_path):
    db_path = tmp_path / "coa.db"
    template = tmp_path / "template.txt"
    run_cli(["template", str(template)], db_path)

    checked = run_cli(["import", str(template), "--validate-only"], db_path)
    assert checked["is_valid"] is True

    imported = run_cli(["import", str(template)], db_path)
    assert imported["imported_count"] == 4

    again = run_cli(["import", str(template)], db_path, expect_ok=False)
    assert again["code"] == "IMPORT_FAILED"

    export = tmp_path / "plan.xlsx"
    exported = run_cli(["export", str(export)], db_path)
    assert exported["exported_count"] == 4

    text = run_cli(["tree", "--expand-all", "--format", "text"], db_path, raw=True)
    assert text.splitlines()[0] == "- 1  ACTIVO DISPONIBLE Y EXIGIBLE"
