from coa.expansion import ExpansionState
from coa.flatten import flatten, render_rows
from coa.hierarchy import build
from coa.models import Account


CODES = ["1", "10", "101", "1011", "1012", "2", "20"]


def _forest(codes=CODES):
    return build([Account(code=code, description=f"Account {code}") for code in codes])


def _row_codes(rows):
    return [row.code for row in rows]


def test_empty_expansion_shows_only_roots():
    rows = flatten(_forest(), ExpansionState())
    assert _row_codes(rows) == ["1", "2"]
    assert all(row.depth == 0 for row in rows)
    assert all(row.has_children for row in rows)
    assert not any(row.expanded for row in rows)


def test_expanded_chain():
    rows = flatten(_forest(), ExpansionState(["1", "10", "101"]))
    assert _row_codes(rows) == ["1", "10", "101", "1011", "1012", "2"]
    assert [row.depth for row in rows] == [0, 1, 2, 3, 3, 0]
    assert [row.has_children for row in rows] == [True, True, True, False, False, True]


def test_collapsed_ancestor_hides_expanded_descendants():
    rows = flatten(_forest(), ExpansionState(["10", "101"]))
    assert _row_codes(rows) == ["1", "2"]


def test_gap_depth_comes_from_code_length():
    rows = flatten(_forest(["1", "1011"]), ExpansionState(["1"]))
    assert _row_codes(rows) == ["1", "1011"]
    assert rows[1].depth == 3


def test_expand_all_then_collapse_all_matches_empty_state():
    forest = _forest()
    expansion = ExpansionState()
    expansion.expand_all(CODES)
    assert len(flatten(forest, expansion)) == len(CODES)
    expansion.collapse_all()
    assert flatten(forest, expansion) == flatten(forest, ExpansionState())


def test_flatten_is_repeatable():
    forest = _forest()
    expansion = ExpansionState(["1"])
    assert flatten(forest, expansion) == flatten(forest, expansion)


def test_deactivated_parent_keeps_children():
    accounts = [Account(code=code, description=code) for code in ["1", "10", "101"]]
    accounts[1].active = False
    rows = flatten(build(accounts), ExpansionState(["1", "10"]))
    assert _row_codes(rows) == ["1", "10", "101"]
    assert rows[1].account.active is False


def test_row_to_dict():
    row = flatten(_forest(["1", "10"]), ExpansionState(["1"]))[0]
    payload = row.to_dict()
    assert payload["code"] == "1"
    assert payload["depth"] == 0
    assert payload["has_children"] is True
    assert payload["expanded"] is True


def test_render_rows():
    rows = flatten(_forest(["1", "10", "1011"]), ExpansionState(["1", "10"]))
    text = render_rows(rows)
    assert text.splitlines() == [
        "- 1  Account 1",
        "  - 10  Account 10",
        "        1011  Account 1011  [postable]",
    ]
