"""
Department Templates — Realistic department blueprints.

Each blueprint names a department, its head's title, the titles used for
further employers, and the positions given to employees.

All data here is plain Python — no external deps.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class DeptBlueprint:
    """A department and the titles people in it carry."""
    name: str
    head_title: str
    lead_titles: List[str]
    staff_positions: List[str]


EXECUTIVE_DEPARTMENT = "Executive"
EXECUTIVE_TITLES = ["Chief Executive Officer", "President", "Chief Operating Officer"]

DEPARTMENT_BLUEPRINTS: List[DeptBlueprint] = [
    DeptBlueprint("Engineering", "VP Engineering",
                  ["Engineering Manager", "Tech Lead"],
                  ["Software Engineer", "Senior Software Engineer", "QA Engineer",
                   "DevOps Engineer"]),
    DeptBlueprint("Sales", "VP Sales",
                  ["Sales Manager", "Regional Director"],
                  ["Account Executive", "Sales Representative", "Sales Analyst"]),
    DeptBlueprint("Finance", "Chief Financial Officer",
                  ["Controller", "Payroll Manager"],
                  ["Accountant", "Payroll Specialist", "Financial Analyst"]),
    DeptBlueprint("People", "Head of People",
                  ["HR Manager", "Recruiting Lead"],
                  ["HR Generalist", "Recruiter", "Benefits Coordinator"]),
    DeptBlueprint("Operations", "VP Operations",
                  ["Operations Manager", "Facilities Lead"],
                  ["Operations Analyst", "Office Coordinator", "Logistics Specialist"]),
    DeptBlueprint("Marketing", "Head of Marketing",
                  ["Marketing Manager", "Brand Lead"],
                  ["Content Writer", "Designer", "Growth Analyst"]),
]

FIRST_NAMES = [
    "Alice", "Bruno", "Chen", "Dana", "Elif", "Farah", "Goran", "Hana",
    "Ivan", "Jonas", "Keiko", "Luis", "Mira", "Nadia", "Omar", "Priya",
    "Quinn", "Rosa", "Sami", "Tariq", "Uma", "Viktor", "Wen", "Yara",
]
LAST_NAMES = [
    "Abbott", "Baker", "Costa", "Dubois", "Eriksen", "Fischer", "Garcia",
    "Haddad", "Ito", "Jansen", "Kowalski", "Larsen", "Moreau", "Novak",
    "Okafor", "Petrov", "Rossi", "Silva", "Tanaka", "Weber",
]
