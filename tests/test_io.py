import json

import openpyxl
import pytest

from coa.io import (
    import_file,
    normalize_column_name,
    read_rows,
    validate_file,
    write_accounts,
    write_template,
)
from coa.models import AccountState, Currency, Nature
from coa.store import CatalogStore
from coa.utils import CatalogError


def test_normalize_column_name():
    assert normalize_column_name("Código") == "code"
    assert normalize_column_name(" descripcion ") == "description"
    assert normalize_column_name("Cuenta Padre") == "explicit_parent_code"
    assert normalize_column_name(None) == ""
    assert normalize_column_name("Other") == "other"


def test_txt_import(tmp_path):
    path = tmp_path / "plan.txt"
    path.write_text(
        "# plan contable\n"
        "codigo|descripcion|naturaleza|moneda\n"
        "1|ACTIVO|DEUDORA|MN\n"
        "10|EFECTIVO|DEUDORA|MN\n"
        "1011|Caja Principal|DEUDORA|ME\n",
        encoding="utf-8",
    )
    store = CatalogStore()
    result = import_file(path, store)
    assert result["success"] is True
    assert result["imported_count"] == 3
    account = store.get("1011")
    assert account.nature == Nature.DEBIT
    assert account.currency == Currency.FOREIGN
    assert account.accepts_movement is True


def test_txt_without_header_uses_default_columns(tmp_path):
    path = tmp_path / "plan.txt"
    path.write_text("4|PASIVO|CREDIT\n40|TRIBUTOS|CREDIT\n", encoding="utf-8")
    rows = read_rows(path)
    assert rows[0]["code"] == "4"
    assert rows[1]["description"] == "TRIBUTOS"
    assert rows[1]["_line"] == 2


def test_validate_file_reports_every_problem(tmp_path):
    path = tmp_path / "plan.txt"
    path.write_text(
        "code|description\n"
        "1|ACTIVO\n"
        "1|ACTIVO again\n"
        "ab|Bad\n"
        "10|\n",
        encoding="utf-8",
    )
    store = CatalogStore()
    report = validate_file(path, store)
    assert report["is_valid"] is False
    assert report["total_lines"] == 4
    assert report["valid_accounts"] == 1
    assert len(report["errors"]) == 3
    assert report["errors"][0].startswith("line 3:")
    assert report["preview_data"][0]["code"] == "1"
    assert len(store) == 0


def test_import_is_all_or_nothing(tmp_path):
    path = tmp_path / "plan.txt"
    path.write_text("code|description\n1|ACTIVO\n10|EFECTIVO\n", encoding="utf-8")
    store = CatalogStore()
    store.add({"code": "10", "description": "Existing"})
    with pytest.raises(CatalogError) as exc:
        import_file(path, store)
    assert exc.value.code == "IMPORT_FAILED"
    assert exc.value.details["valid_accounts"] == 1
    assert store.codes() == ["10"]


def test_excel_round_trip(tmp_path):
    store = CatalogStore()
    store.add({"code": "1", "description": "ACTIVO"})
    store.add({"code": "1011", "description": "Caja", "currency": "FOREIGN"})
    store.deactivate("1011")

    path = tmp_path / "plan.xlsx"
    assert write_accounts(path, store.snapshot()) == 2

    wb = openpyxl.load_workbook(path)
    assert wb.active.cell(row=1, column=1).value == "code"
    wb.close()

    copy = CatalogStore()
    result = import_file(path, copy)
    assert result["imported_count"] == 2
    assert copy.get("1011").active is False
    assert copy.get("1011").currency == Currency.FOREIGN


def test_excel_numeric_codes(tmp_path):
    path = tmp_path / "plan.xlsx"
    wb = openpyxl.Workbook()
    sheet = wb.active
    sheet.append(["Codigo", "Descripcion", "Es Hoja"])
    sheet.append([1, "ACTIVO", "NO"])
    sheet.append([1011, "Caja", "SI"])
    wb.save(path)

    store = CatalogStore()
    import_file(path, store)
    assert store.codes() == ["1", "1011"]
    assert store.get("1011").is_leaf is True


def test_json_and_csv_export(tmp_path):
    store = CatalogStore()
    store.add({"code": "5", "description": "PATRIMONIO", "nature": "CREDIT"})

    json_path = tmp_path / "plan.json"
    write_accounts(json_path, store.snapshot())
    payload = json.loads(json_path.read_text(encoding="utf-8"))
    assert payload["accounts"][0]["nature"] == "CREDIT"

    csv_path = tmp_path / "plan.csv"
    write_accounts(csv_path, store.snapshot())
    rows = read_rows(csv_path)
    assert rows[0]["code"] == "5"
    assert rows[0]["level"] == "1"


def test_invalid_boolean_is_reported(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(json.dumps([{"code": "1011", "description": "x", "active": "maybe"}]))
    report = validate_file(path)
    assert report["is_valid"] is False
    assert "invalid boolean" in report["errors"][0]


def test_unsupported_and_missing_files(tmp_path):
    with pytest.raises(CatalogError):
        read_rows(tmp_path / "missing.txt")
    bad = tmp_path / "plan.pdf"
    bad.write_text("x")
    with pytest.raises(CatalogError) as exc:
        read_rows(bad)
    assert exc.value.code == "INVALID_FILE"
    with pytest.raises(CatalogError):
        write_accounts(tmp_path / "out.pdf", [])


def test_template_imports_cleanly(tmp_path):
    path = tmp_path / "template.txt"
    assert write_template(path) == 4
    report = validate_file(path)
    assert report["is_valid"] is True
    assert report["valid_accounts"] == 4


def test_txt_round_trip_keeps_pipes_in_description(tmp_path):
    store = CatalogStore()
    store.add({"code": "1", "description": "ACTIVO"})
    store.add({"code": "1011", "description": "Caja | Bancos", "nature": "DEBIT"})

    path = tmp_path / "plan.txt"
    write_accounts(path, store.snapshot())

    copy = CatalogStore()
    result = import_file(path, copy)
    assert result["imported_count"] == 2
    assert copy.get("1011").description == "Caja | Bancos"
    assert copy.get("1011").nature == Nature.DEBIT


def test_txt_header_in_any_column_order(tmp_path):
    path = tmp_path / "plan.txt"
    path.write_text("descripcion|codigo\nACTIVO|1\nEFECTIVO|10\n", encoding="utf-8")
    rows = read_rows(path)
    assert [row["code"] for row in rows] == ["1", "10"]
    assert rows[0]["description"] == "ACTIVO"


def test_txt_data_row_with_column_like_description(tmp_path):
    path = tmp_path / "plan.txt"
    path.write_text("1|Cuenta|DEBIT\n", encoding="utf-8")
    rows = read_rows(path)
    assert rows[0]["code"] == "1"
    assert rows[0]["description"] == "Cuenta"


def test_import_deactivates_rows_marked_inactive(tmp_path):
    path = tmp_path / "plan.json"
    path.write_text(
        json.dumps(
            [
                {"code": "1", "description": "ACTIVO"},
                {"code": "1011", "description": "Caja", "active": False},
            ]
        ),
        encoding="utf-8",
    )
    store = CatalogStore()
    result = import_file(path, store)
    assert result["imported_count"] == 2
    assert store.get("1").state == AccountState.ACTIVE_NONPOSTABLE
    assert store.get("1011").state == AccountState.INACTIVE
