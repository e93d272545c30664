#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Pure helpers deriving level, class and leaf eligibility from account codes."""

from __future__ import annotations

from typing import Any, List, Tuple

from coa.utils import MalformedCodeError


MIN_CODE_LENGTH = 1
MAX_CODE_LENGTH = 9
LEAF_MIN_LEVEL = 4


LEVEL_NAMES = {
    1: "Clase",
    2: "Grupo",
    3: "Subgrupo",
    4: "Cuenta",
    5: "Subcuenta",
    6: "Divisionaria",
    7: "Subdivisionaria",
    8: "Auxiliar",
}


CLASS_NAMES = {
    1: "ACTIVO DISPONIBLE Y EXIGIBLE",
    2: "ACTIVO REALIZABLE",
    3: "ACTIVO INMOVILIZADO",
    4: "PASIVO",
    5: "PATRIMONIO NETO",
    6: "GASTOS POR NATURALEZA",
    7: "INGRESOS",
    8: "SALDOS INTERMEDIARIOS DE GESTION",
    9: "CONTABILIDAD ANALITICA DE EXPLOTACION",
}


def is_numeric_code(code: Any) -> bool:
    """True when ``code`` is a non-empty string made only of ASCII digits."""
    return isinstance(code, str) and code != "" and code.isascii() and code.isdigit()


def level_of(code: str) -> int:
    return len(code)


def class_of(code: str) -> int:
    if not is_numeric_code(code):
        raise MalformedCodeError(code)
    return int(code[0])


def is_leaf_eligible(code: str) -> bool:
    return level_of(code) >= LEAF_MIN_LEVEL


def level_name(level: int) -> str:
    return LEVEL_NAMES.get(level, f"Nivel {level}")


def class_name(account_class: int) -> str:
    return CLASS_NAMES.get(account_class, f"Clase {account_class}")


def parent_candidates(code: str) -> List[str]:
    """Proper prefixes of ``code``, longest first.

    "1011" -> ["101", "10", "1"]
    """
    return [code[:length] for length in range(len(code) - 1, 0, -1)]


def code_sort_key(code: str) -> Tuple[int, Any, str]:
    """Sort key that orders numeric codes by value and anything else lexically.

    Numeric codes sort before non-numeric ones; ties on value (e.g. "01" and
    "1") fall back to the raw string so the order stays total.
    """
    if is_numeric_code(code):
        return (0, int(code), code)
    return (1, code, code)

