"""
Organizational Hierarchy — Navigation Controller Tests

Fixture org (CEO declares no department):

  1 Carla Chen (CEO)
  ├── 2 Erin Eng (VP Engineering, head of Engineering)
  │   ├── 3 Dan Dev (Sales Liaison)
  │   └── 4 Lena Lead (Tech Lead)
  │       └── 5 Nina New (Intern)
  └── 6 Sam Sales (VP Sales, head of Sales)
      └── 7 Rita Rep (Account Executive)

Run:  pytest org_hierarchy/test_navigation.py
"""

from __future__ import annotations

from org_hierarchy.departments import extract_departments
from org_hierarchy.domain_types import ViewMode
from org_hierarchy.flatten import build_index
from org_hierarchy.navigation import NavigationController
from org_hierarchy.tree_builder import build_tree

EMPLOYERS = [
    {"id": 1, "name": "Carla Chen", "title": "CEO", "department": "", "managerId": None},
    {"id": 2, "name": "Erin Eng", "title": "VP Engineering", "department": "Engineering", "managerId": 1},
    {"id": 6, "name": "Sam Sales", "title": "VP Sales", "department": "Sales", "managerId": 1},
]
EMPLOYEES = [
    {"id": 3, "name": "Dan Dev", "position": "Sales Liaison", "managerId": 2},
    {"id": 4, "name": "Lena Lead", "position": "Tech Lead", "managerId": 2},
    {"id": 5, "name": "Nina New", "position": "Intern", "managerId": 4},
    {"id": 7, "name": "Rita Rep", "position": "Account Executive", "managerId": 6},
]


def _controller(employees=EMPLOYEES, employers=EMPLOYERS):
    root = build_tree(employees, employers)
    return NavigationController(root, build_index(root), extract_departments(root, employers))


def _assert_path_reachable(nav):
    """Every expanded id is an ancestor of the highlight and the chain is unbroken."""
    state = nav.state
    index = build_index(nav.root)
    ancestors = index.ancestors(state.search_highlight)
    assert state.expanded_path <= set(ancestors)
    for node_id in ancestors:
        if node_id == state.current_root.id:
            break
        assert node_id in state.expanded_path


# ---------------------------------------------------------------------------
# Drill-down
# ---------------------------------------------------------------------------

def test_initial_state_is_grid():
    state = _controller().state
    assert state.view_mode is ViewMode.MACRO_GRID
    assert state.current_root is None
    assert state.search_highlight is None
    assert state.expanded_path == frozenset()


def test_open_department_and_reset():
    nav = _controller()

    state = nav.open_department(2)
    assert state.view_mode is ViewMode.MICRO_TREE
    assert state.current_root.id == 2

    state = nav.reset_view()
    assert state.view_mode is ViewMode.MACRO_GRID
    assert state.current_root is None


def test_open_unknown_department_keeps_state():
    nav = _controller()
    assert nav.open_department(999).view_mode is ViewMode.MACRO_GRID

    nav.open_department(6)
    state = nav.open_department(999)
    assert state.view_mode is ViewMode.MICRO_TREE
    assert state.current_root.id == 6


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def test_search_from_grid_anchors_at_department_head():
    nav = _controller()

    state = nav.handle_search("NINA")

    assert state.view_mode is ViewMode.MICRO_TREE
    assert state.current_root.id == 2
    assert state.search_highlight == 5
    assert state.expanded_path == frozenset({1, 2, 4})
    _assert_path_reachable(nav)


def test_search_takes_first_name_or_position_hit_in_flatten_order():
    nav = _controller()
    # "Sales Liaison" (3) precedes "Sam Sales" (6) in flatten order
    state = nav.handle_search("sales")
    assert state.search_highlight == 3
    assert state.current_root.id == 2


def test_search_falls_back_to_position():
    nav = _controller()
    state = nav.handle_search("tech")
    assert state.search_highlight == 4
    assert state.current_root.id == 2


def test_search_inside_current_branch_keeps_root():
    nav = _controller()
    nav.open_department(2)

    state = nav.handle_search("dan")

    assert state.current_root.id == 2
    assert state.search_highlight == 3
    assert state.expanded_path == frozenset({1, 2})


def test_search_outside_current_branch_reanchors():
    nav = _controller()
    nav.open_department(6)

    state = nav.handle_search("nina")

    assert state.view_mode is ViewMode.MICRO_TREE
    assert state.current_root.id == 2
    _assert_path_reachable(nav)


def test_blank_search_resets_view():
    nav = _controller()
    nav.handle_search("rita")

    state = nav.handle_search("   ")

    assert state.view_mode is ViewMode.MACRO_GRID
    assert state.search_highlight is None
    assert state.expanded_path == frozenset()


def test_every_person_is_reachable_by_search():
    nav = _controller()
    for rec in EMPLOYEES + EMPLOYERS:
        nav.reset_view()
        state = nav.handle_search(rec["name"])
        assert state.search_highlight == rec["id"]
        assert state.view_mode is ViewMode.MICRO_TREE
        _assert_path_reachable(nav)


# ---------------------------------------------------------------------------
# Highlight bookkeeping
# ---------------------------------------------------------------------------

def test_open_department_keeps_highlight_inside_branch():
    nav = _controller()
    nav.handle_search("nina")

    state = nav.open_department(4)
    assert state.search_highlight == 5
    assert state.expanded_path == frozenset({1, 2, 4})

    state = nav.open_department(6)
    assert state.search_highlight is None
    assert state.expanded_path == frozenset()


def test_focus_node():
    nav = _controller()

    state = nav.focus_node(7)
    assert state.search_highlight == 7
    assert state.current_root.id == 6

    state = nav.focus_node(999)
    assert state.search_highlight is None
    assert state.current_root.id == 6


def test_is_node_expanded_unions_manual_and_path():
    nav = _controller()
    nav.handle_search("nina")

    assert nav.is_node_expanded(4)
    assert nav.is_node_expanded(7, manual={7})
    assert not nav.is_node_expanded(7)
    assert not nav.is_node_expanded(5)


# ---------------------------------------------------------------------------
# Synthetic root
# ---------------------------------------------------------------------------

def test_anchor_falls_back_to_synthetic_root():
    employees = [
        {"id": 1, "name": "Ann", "managerId": None},
        {"id": 2, "name": "Ben", "managerId": 1},
        {"id": 3, "name": "Cy", "managerId": None},
    ]
    nav = _controller(employees, [])
    assert nav.root.is_virtual

    state = nav.handle_search("ben")

    assert state.current_root is nav.root
    assert state.expanded_path == frozenset({1})
    assert nav.is_node_expanded(nav.root.id)
    assert nav.focus_node(nav.root.id).search_highlight is None


# ---------------------------------------------------------------------------
# Rebind after rebuild
# ---------------------------------------------------------------------------

def test_rebind_carries_state_by_id():
    nav = _controller()
    nav.handle_search("rita")

    root = build_tree(EMPLOYEES, EMPLOYERS)
    state = nav.rebind(root, departments=extract_departments(root, EMPLOYERS))

    assert state.view_mode is ViewMode.MICRO_TREE
    assert state.current_root is build_index(root).get(6)
    assert state.search_highlight == 7
    assert state.expanded_path == frozenset({1, 6})


def test_rebind_with_stale_ids_falls_back_to_grid():
    nav = _controller()
    nav.handle_search("rita")

    survivors = [r for r in EMPLOYEES if r["id"] != 7]
    employers = [r for r in EMPLOYERS if r["id"] != 6]
    root = build_tree(survivors, employers)
    state = nav.rebind(root, departments=extract_departments(root, employers))

    assert state.view_mode is ViewMode.MACRO_GRID
    assert state.current_root is None
    assert state.search_highlight is None
    assert state.expanded_path == frozenset()
    assert nav.open_department(6).view_mode is ViewMode.MACRO_GRID


def test_rebind_follows_highlight_that_left_the_branch():
    nav = _controller()
    nav.handle_search("rita")
    assert nav.state.current_root.id == 6

    moved = [dict(r, managerId=2) if r["id"] == 7 else r for r in EMPLOYEES]
    root = build_tree(moved, EMPLOYERS)
    state = nav.rebind(root, departments=extract_departments(root, EMPLOYERS))

    assert state.view_mode is ViewMode.MICRO_TREE
    assert state.search_highlight == 7
    assert state.current_root.id == 2
    assert state.expanded_path == frozenset({1, 2})
    _assert_path_reachable(nav)
