#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Import and export of the flat account shape.

Supported files:
    .txt   pipe-delimited, optional header line, "#" comments
    .csv   comma-delimited with a header row
    .xlsx  first worksheet, header in row 1
    .json  list of account objects, or {"accounts": [...]}

Column headers are normalized, so Spanish headers from the web client
templates (codigo, descripcion, naturaleza, moneda, ...) are accepted.
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

import openpyxl
from openpyxl.styles import Font

from coa.codes import is_numeric_code
from coa.models import Account
from coa.store import CatalogStore
from coa.utils import CatalogError
from coa.validation import validate


logger = logging.getLogger(__name__)


EXPORT_COLUMNS = [
    "code",
    "description",
    "level",
    "account_class",
    "nature",
    "currency",
    "is_leaf",
    "accepts_movement",
    "active",
    "explicit_parent_code",
]


TXT_COLUMNS = [
    "code",
    "description",
    "nature",
    "currency",
    "is_leaf",
    "accepts_movement",
    "active",
    "explicit_parent_code",
]


COLUMN_MAPPING = {
    "code": "code",
    "codigo": "code",
    "código": "code",
    "cuenta": "code",
    "account_code": "code",
    "description": "description",
    "descripcion": "description",
    "descripción": "description",
    "nombre": "description",
    "name": "description",
    "level": "level",
    "nivel": "level",
    "account_class": "account_class",
    "class": "account_class",
    "clase": "account_class",
    "clase_contable": "account_class",
    "nature": "nature",
    "naturaleza": "nature",
    "currency": "currency",
    "moneda": "currency",
    "is_leaf": "is_leaf",
    "es_hoja": "is_leaf",
    "hoja": "is_leaf",
    "accepts_movement": "accepts_movement",
    "acepta_movimiento": "accepts_movement",
    "movimiento": "accepts_movement",
    "active": "active",
    "activa": "active",
    "activo": "active",
    "explicit_parent_code": "explicit_parent_code",
    "parent_code": "explicit_parent_code",
    "cuenta_padre": "explicit_parent_code",
    "padre": "explicit_parent_code",
}


TRUE_VALUES = {"1", "true", "t", "yes", "y", "si", "sí", "s", "x"}
FALSE_VALUES = {"0", "false", "f", "no", "n"}


TEMPLATE_ROWS = [
    {"code": "1", "description": "ACTIVO DISPONIBLE Y EXIGIBLE", "nature": "DEBIT"},
    {"code": "10", "description": "EFECTIVO Y EQUIVALENTES DE EFECTIVO", "nature": "DEBIT"},
    {"code": "101", "description": "Caja", "nature": "DEBIT"},
    {"code": "1011", "description": "Caja Principal", "nature": "DEBIT"},
]


PREVIEW_SIZE = 10


def normalize_column_name(col_name: Any) -> str:
    if col_name is None:
        return ""
    key = str(col_name).strip().lower().replace(" ", "_").replace("-", "_")
    return COLUMN_MAPPING.get(key, key)


def _parse_bool(value: Any) -> Optional[bool]:
    if value is None or isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "":
        return None
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean: {value!r}")


def _parse_code(value: Any) -> str:
    # Excel hands numeric cells back as int or float
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return "" if value is None else str(value).strip()


def normalize_row(raw: Dict[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """Clean one raw row; returns (account-shaped data, problems)."""
    data: Dict[str, Any] = {}
    problems: List[str] = []
    for key, value in raw.items():
        if key not in EXPORT_COLUMNS:
            continue
        if isinstance(value, str):
            value = value.strip()
        if key in ("code", "explicit_parent_code"):
            value = _parse_code(value) or None
        elif key in ("is_leaf", "accepts_movement", "active"):
            try:
                value = _parse_bool(value)
            except ValueError as exc:
                problems.append(f"{key}: {exc}")
                value = None
        elif key in ("level", "account_class"):
            if value in ("", None):
                value = None
        elif value == "":
            value = None
        if value is not None:
            data[key] = value
    data.setdefault("code", "")
    data.setdefault("description", "")
    return data, problems


def _is_txt_header(values: List[str]) -> bool:
    known = set(EXPORT_COLUMNS)
    return any(normalize_column_name(v) in known for v in values) and not any(
        is_numeric_code(v) for v in values
    )


def read_txt_rows(path: Path, encoding: str = "utf-8") -> List[Dict[str, Any]]:
    rows: List[Dict[str, Any]] = []
    columns = TXT_COLUMNS
    header_seen = False
    lines = path.read_text(encoding=encoding).splitlines()
    for line_no, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        values = [value.strip() for value in next(csv.reader([stripped], delimiter="|"))]
        if not rows and not header_seen and _is_txt_header(values):
            columns = [normalize_column_name(value) for value in values]
            header_seen = True
            continue
        row = dict(zip(columns, values))
        row["_line"] = line_no
        rows.append(row)
    return rows


def read_csv_rows(path: Path, encoding: str = "utf-8") -> List[Dict[str, Any]]:
    with open(path, "r", encoding=encoding, newline="") as f:
        all_rows = list(csv.reader(f))
    if not all_rows:
        return []
    headers = [normalize_column_name(h) for h in all_rows[0]]
    rows = []
    for line_no, values in enumerate(all_rows[1:], start=2):
        row: Dict[str, Any] = {}
        for i, value in enumerate(values):
            if i < len(headers) and headers[i]:
                row[headers[i]] = value
        if any(v for v in row.values()):
            row["_line"] = line_no
            rows.append(row)
    return rows


def read_excel_rows(path: Path, header_row: int = 1) -> List[Dict[str, Any]]:
    wb = openpyxl.load_workbook(path, data_only=True)
    try:
        sheet = wb.active
        header_cells = next(sheet.iter_rows(min_row=header_row, max_row=header_row), ())
        headers = [normalize_column_name(cell.value) for cell in header_cells]
        rows = []
        for row_no, cells in enumerate(
            sheet.iter_rows(min_row=header_row + 1), start=header_row + 1
        ):
            row: Dict[str, Any] = {}
            for i, cell in enumerate(cells):
                if i < len(headers) and headers[i]:
                    row[headers[i]] = cell.value
            if any(v is not None and v != "" for v in row.values()):
                row["_line"] = row_no
                rows.append(row)
    finally:
        wb.close()
    return rows


def read_json_rows(path: Path) -> List[Dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise CatalogError("INVALID_JSON", f"Invalid JSON file: {exc}") from exc
    if isinstance(payload, dict):
        payload = payload.get("accounts", [])
    if not isinstance(payload, list):
        raise CatalogError("INVALID_FILE", "JSON file must hold a list of accounts")
    rows = []
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise CatalogError("INVALID_FILE", f"Entry {index} is not an object")
        row = {normalize_column_name(k): v for k, v in item.items()}
        row["_line"] = index
        rows.append(row)
    return rows


def read_rows(path: str | Path) -> List[Dict[str, Any]]:
    path = Path(path)
    if not path.exists():
        raise CatalogError("INVALID_FILE", f"File not found: {path}")
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return read_txt_rows(path)
    if suffix == ".csv":
        return read_csv_rows(path)
    if suffix in (".xlsx", ".xlsm"):
        return read_excel_rows(path)
    if suffix == ".json":
        return read_json_rows(path)
    raise CatalogError(
        "INVALID_FILE", f"Unsupported file type {suffix!r}; use .txt, .csv, .xlsx or .json"
    )


def validate_rows(
    rows: Iterable[Dict[str, Any]], existing: Iterable[str] = ()
) -> Dict[str, Any]:
    """Validate rows against ``existing`` codes and against earlier rows."""
    seen: Set[str] = set(existing)
    errors: List[str] = []
    warnings: List[str] = []
    accounts: List[Dict[str, Any]] = []
    total = 0
    for raw in rows:
        total += 1
        line = raw.get("_line", total)
        data, problems = normalize_row(raw)
        result = validate(data, seen)
        errors.extend(f"line {line}: {problem}" for problem in problems)
        errors.extend(f"line {line}: {issue.message}" for issue in result.errors)
        warnings.extend(f"line {line}: {issue.message}" for issue in result.warnings)
        if result.ok and not problems:
            accounts.append(data)
        if isinstance(data.get("code"), str) and data["code"]:
            seen.add(data["code"])
    return {
        "is_valid": not errors and total > 0,
        "errors": errors,
        "warnings": warnings,
        "total_lines": total,
        "valid_accounts": len(accounts),
        "preview_data": accounts[:PREVIEW_SIZE],
        "accounts": accounts,
    }


def validate_file(path: str | Path, store: Optional[CatalogStore] = None) -> Dict[str, Any]:
    rows = read_rows(path)
    report = validate_rows(rows, store.codes() if store is not None else ())
    report.pop("accounts")
    return report


def import_file(path: str | Path, store: CatalogStore) -> Dict[str, Any]:
    """Validate ``path`` and add every row to ``store``; all or nothing."""
    rows = read_rows(path)
    report = validate_rows(rows, store.codes())
    if not report["is_valid"]:
        report.pop("accounts")
        raise CatalogError(
            "IMPORT_FAILED",
            f"Import rejected with {len(report['errors'])} errors",
            report,
        )
    imported = []
    for data in report["accounts"]:
        active = data.pop("active", True)
        account = store.add(data).account
        if not active:
            account = store.deactivate(account.code)
        imported.append(account)
    logger.info("imported %d accounts from %s", len(imported), path)
    return {
        "success": True,
        "imported_count": len(imported),
        "errors": [],
        "warnings": report["warnings"],
        "codes": [account.code for account in imported],
    }


def _export_value(account: Account, column: str) -> Any:
    value = account.to_dict()[column]
    return "" if value is None else value


def write_txt(path: Path, accounts: Iterable[Account]) -> None:
    # fields holding "|" are quoted, so descriptions survive a round trip
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, delimiter="|", lineterminator="\n")
        writer.writerow(TXT_COLUMNS)
        for account in accounts:
            values = []
            for column in TXT_COLUMNS:
                value = _export_value(account, column)
                if isinstance(value, bool):
                    value = "1" if value else "0"
                values.append(value)
            writer.writerow(values)


def write_csv(path: Path, accounts: Iterable[Account]) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(EXPORT_COLUMNS)
        for account in accounts:
            writer.writerow([_export_value(account, column) for column in EXPORT_COLUMNS])


def write_excel(path: Path, accounts: Iterable[Account]) -> None:
    wb = openpyxl.Workbook()
    sheet = wb.active
    sheet.title = "Plan contable"
    sheet.append(EXPORT_COLUMNS)
    for cell in sheet[1]:
        cell.font = Font(bold=True)
    for account in accounts:
        sheet.append([_export_value(account, column) for column in EXPORT_COLUMNS])
    sheet.column_dimensions["B"].width = 48
    wb.save(path)


def write_json(path: Path, accounts: Iterable[Account]) -> None:
    payload = {"accounts": [account.to_dict() for account in accounts]}
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def write_accounts(path: str | Path, accounts: Iterable[Account]) -> int:
    path = Path(path)
    accounts = list(accounts)
    suffix = path.suffix.lower()
    writers = {
        ".txt": write_txt,
        ".csv": write_csv,
        ".xlsx": write_excel,
        ".json": write_json,
    }
    writer = writers.get(suffix)
    if writer is None:
        raise CatalogError(
            "INVALID_FILE", f"Unsupported file type {suffix!r}; use .txt, .csv, .xlsx or .json"
        )
    writer(path, accounts)
    logger.info("exported %d accounts to %s", len(accounts), path)
    return len(accounts)


def write_template(path: str | Path) -> int:
    return write_accounts(path, [Account(**row) for row in TEMPLATE_ROWS])
