"""
Organizational Hierarchy — Default Constants

All magic values live here as module-level defaults.
Runtime overrides are injected via HierarchyConstants.
"""

from .domain_types import HierarchyConstants

# --- Department Resolution ---
UNASSIGNED_DEPARTMENT: str = "Unassigned"

# --- Synthetic Root ---
# Real ids are positive integers; the synthetic root sits outside that space.
VIRTUAL_ROOT_ID: int = -1
VIRTUAL_ROOT_NAME: str = ""

# --- Child Ordering ---
EMPLOYERS_FIRST: bool = True

DEFAULT_CONSTANTS = HierarchyConstants(
    unassigned_department=UNASSIGNED_DEPARTMENT,
    virtual_root_id=VIRTUAL_ROOT_ID,
    virtual_root_name=VIRTUAL_ROOT_NAME,
    employers_first=EMPLOYERS_FIRST,
)
