"""
Organizational Hierarchy — Test Scenarios

End-to-end scenarios over the four layers:
  1. Single natural root: employer 1 → 2 → 3, one department
  2. Two unconnected employers → synthetic root
  3. Search without a match leaves navigation alone
  4. Empty snapshot

Run:  pytest org_hierarchy/test_scenarios.py
"""

from __future__ import annotations

from org_hierarchy.departments import extract_departments
from org_hierarchy.domain_types import DepartmentSummary, ViewMode
from org_hierarchy.flatten import build_index, flatten_tree
from org_hierarchy.navigation import NavigationController
from org_hierarchy.tree_builder import build_tree


def _emp(pid, manager_id, name="", position=""):
    return {"id": pid, "managerId": manager_id, "name": name or f"Person {pid}", "position": position}


def _boss(pid, manager_id, department, name="", title=""):
    return {
        "id": pid, "managerId": manager_id, "department": department,
        "name": name or f"Boss {pid}", "title": title,
    }


# ───────────────────────────────────────────────────────────────
# Scenario 1: Single natural root
# ───────────────────────────────────────────────────────────────

def test_scenario_1_single_natural_root():
    employees = [_emp(2, 1), _emp(3, 2)]
    employers = [_boss(1, None, "Exec")]

    root = build_tree(employees, employers)

    assert root.id == 1
    assert not root.is_virtual
    assert [c.id for c in root.children] == [2]
    assert [c.id for c in root.children[0].children] == [3]
    assert len(flatten_tree(root)) == 3
    assert {n.department for n in flatten_tree(root)} == {"Exec"}

    assert extract_departments(root, employers) == [
        DepartmentSummary(name="Exec", head_id=1, head_name="Boss 1", employee_count=3),
    ]


# ───────────────────────────────────────────────────────────────
# Scenario 2: Synthetic root wraps unconnected employers
# ───────────────────────────────────────────────────────────────

def test_scenario_2_synthetic_root():
    employers = [_boss(1, None, "Sales", name="Ada"), _boss(2, None, "Ops", name="Bea")]

    root = build_tree([], employers)
    flat = flatten_tree(root)

    assert root.is_virtual
    assert root.id == -1
    assert root.name == ""
    assert [c.id for c in root.children] == [1, 2]
    assert len(flat) == 3
    assert root in flat

    names = [d.name for d in extract_departments(root, employers)]
    assert names == ["Sales", "Ops"]


# ───────────────────────────────────────────────────────────────
# Scenario 3: Search with no match
# ───────────────────────────────────────────────────────────────

def test_scenario_3_search_without_match_from_grid():
    employees = [_emp(2, 1, name="Bob", position="Analyst")]
    employers = [_boss(1, None, "Exec", name="Ann", title="CEO")]
    root = build_tree(employees, employers)
    nav = NavigationController(root, build_index(root), extract_departments(root, employers))

    before = nav.state
    after = nav.handle_search("engineer")

    assert after.view_mode is ViewMode.MACRO_GRID
    assert after.current_root is None
    assert after.search_highlight is None
    assert after == before


def test_scenario_3_search_without_match_after_hit():
    employees = [_emp(2, 1, name="Bob", position="Analyst")]
    employers = [_boss(1, None, "Exec", name="Ann", title="CEO")]
    root = build_tree(employees, employers)
    nav = NavigationController(root, build_index(root), extract_departments(root, employers))

    hit = nav.handle_search("bob")
    assert hit.search_highlight == 2

    miss = nav.handle_search("engineer")
    assert miss.search_highlight is None
    assert miss.view_mode is hit.view_mode
    assert miss.current_root is hit.current_root
    assert miss.expanded_path == hit.expanded_path


# ───────────────────────────────────────────────────────────────
# Scenario 4: Empty snapshot
# ───────────────────────────────────────────────────────────────

def test_scenario_4_empty_snapshot():
    root = build_tree([], [])

    assert root.is_virtual
    assert root.children == []
    assert flatten_tree(root) == [root]
    assert extract_departments(root, []) == []

    nav = NavigationController(root)
    assert nav.handle_search("anyone").search_highlight is None
    assert nav.open_department(1).view_mode is ViewMode.MACRO_GRID
