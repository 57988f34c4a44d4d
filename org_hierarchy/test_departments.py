"""
Organizational Hierarchy — Department Extractor Tests

Run:  pytest org_hierarchy/test_departments.py
"""

from __future__ import annotations

from org_hierarchy.departments import department_head_ids, extract_departments
from org_hierarchy.domain_types import DepartmentSummary
from org_hierarchy.tree_builder import build_tree


def _emp(pid, manager_id=None, name=""):
    return {"id": pid, "managerId": manager_id, "name": name or f"Person {pid}"}


def _boss(pid, manager_id=None, department="", name=""):
    return {"id": pid, "managerId": manager_id, "department": department, "name": name or f"Boss {pid}"}


def test_first_employer_in_preorder_heads_department():
    employers = [
        _boss(1, None, "Exec", name="Carla"),
        _boss(2, 1, "Eng", name="Erin"),
        _boss(4, 2, "Exec", name="Eve"),
    ]
    employees = [_emp(3, 2, name="Dan"), _emp(5, 4, name="Sam")]

    root = build_tree(employees, employers)
    departments = extract_departments(root, employers)

    assert departments == [
        DepartmentSummary(name="Exec", head_id=1, head_name="Carla", employee_count=3),
        DepartmentSummary(name="Eng", head_id=2, head_name="Erin", employee_count=2),
    ]
    assert department_head_ids(departments) == {1, 2}


def test_later_employer_of_known_department_does_not_replace_head():
    employers = [_boss(1, None, "Sales", name="Ann"), _boss(2, 1, "Sales", name="Ben")]

    departments = extract_departments(build_tree([], employers), employers)

    assert len(departments) == 1
    assert departments[0].head_id == 1
    assert departments[0].employee_count == 2


def test_synthetic_root_starts_at_children():
    employers = [_boss(1, None, "Sales")]
    employees = [_emp(9), _emp(10, 9)]

    root = build_tree(employees, employers)
    assert root.is_virtual

    departments = extract_departments(root, employers)

    assert [(d.name, d.head_id, d.employee_count) for d in departments] == [("Sales", 1, 1)]


def test_members_of_unassigned_roots_are_not_counted():
    employers = [_boss(1, None, "Ops")]
    employees = [_emp(2, 1), _emp(3), _emp(4, 3)]

    departments = extract_departments(build_tree(employees, employers), employers)

    assert departments[0].employee_count == 2


def test_no_declared_department_yields_empty_list():
    employers = [_boss(1, None, "")]
    employees = [_emp(2, 1)]

    assert extract_departments(build_tree(employees, employers), employers) == []


def test_none_root_yields_empty_list():
    assert extract_departments(None, []) == []


def test_order_follows_discovery_not_name():
    employers = [
        _boss(1, None, "", name="Root"),
        _boss(2, 1, "Zeta", name="Alice"),
        _boss(3, 1, "Alpha", name="Bob"),
    ]

    names = [d.name for d in extract_departments(build_tree([], employers), employers)]

    assert names == ["Zeta", "Alpha"]
