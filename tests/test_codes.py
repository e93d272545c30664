import pytest

from coa.codes import (
    class_name,
    class_of,
    code_sort_key,
    is_leaf_eligible,
    is_numeric_code,
    level_name,
    level_of,
    parent_candidates,
)
from coa.utils import MalformedCodeError


@pytest.mark.parametrize("code", ["1", "10", "101", "1011", "401110", "123456789"])
def test_level_and_class_follow_code(code):
    assert level_of(code) == len(code)
    assert class_of(code) == int(code[0])


@pytest.mark.parametrize("code", ["", "ab1", "1a", " 10", "１２"])
def test_class_of_rejects_malformed_codes(code):
    with pytest.raises(MalformedCodeError) as exc:
        class_of(code)
    assert exc.value.code == "MALFORMED_CODE"


def test_class_of_rejects_non_strings():
    with pytest.raises(MalformedCodeError):
        class_of(None)


def test_leaf_eligibility_starts_at_level_four():
    assert not is_leaf_eligible("1")
    assert not is_leaf_eligible("101")
    assert is_leaf_eligible("1011")
    assert is_leaf_eligible("1041001")


def test_is_numeric_code():
    assert is_numeric_code("1011")
    assert not is_numeric_code("")
    assert not is_numeric_code("10.1")
    assert not is_numeric_code(1011)


def test_parent_candidates_longest_first():
    assert parent_candidates("1011") == ["101", "10", "1"]
    assert parent_candidates("1") == []


def test_code_sort_key_is_numeric():
    codes = ["1012", "12", "1011", "9", "101"]
    assert sorted(codes, key=code_sort_key) == ["9", "12", "101", "1011", "1012"]


def test_code_sort_key_puts_non_numeric_last():
    assert sorted(["b", "2", "a", "10"], key=code_sort_key) == ["2", "10", "a", "b"]


def test_names():
    assert level_name(1) == "Clase"
    assert level_name(4) == "Cuenta"
    assert level_name(9) == "Nivel 9"
    assert class_name(4) == "PASIVO"
