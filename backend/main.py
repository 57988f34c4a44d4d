# file: backend/main.py
"""
FastAPI Backend — Organizational Hierarchy API v1.

The hierarchy core is pure; this module is a thin adapter around it.
Sessions live in process memory only (one HierarchySession per viewer).

Endpoints:
  GET    /health
  POST   /hierarchy                          — stateless build + projection
  PUT    /sessions/{session_id}/snapshot     — load snapshot into a session
  GET    /sessions/{session_id}              — current session view
  POST   /sessions/{session_id}/open-department
  POST   /sessions/{session_id}/reset
  POST   /sessions/{session_id}/search
  POST   /sessions/{session_id}/focus
  POST   /sessions/{session_id}/toggle
  DELETE /sessions/{session_id}
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from dotenv import load_dotenv

env_path = os.path.join(os.path.dirname(__file__), ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from org_hierarchy.constants import DEFAULT_CONSTANTS
from org_hierarchy.departments import extract_departments
from org_hierarchy.diagnostics import compute_diagnostics
from org_hierarchy.domain_types import HierarchyConstants
from org_hierarchy.flatten import flatten_tree
from org_hierarchy.invariants import collect_tree_issues
from org_hierarchy.hashing import snapshot_hash
from org_hierarchy.records import RecordError, normalize_employees, normalize_employers
from org_hierarchy.session import HierarchySession
from org_hierarchy.tree_builder import build_tree_with_report

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")
LOG_LEVEL = os.environ.get("ORGCHART_LOG_LEVEL", "INFO")

CONSTANTS = HierarchyConstants(
    unassigned_department=os.environ.get(
        "ORGCHART_UNASSIGNED_DEPARTMENT", DEFAULT_CONSTANTS.unassigned_department,
    ),
    virtual_root_id=DEFAULT_CONSTANTS.virtual_root_id,
    virtual_root_name=os.environ.get(
        "ORGCHART_VIRTUAL_ROOT_NAME", DEFAULT_CONSTANTS.virtual_root_name,
    ),
    employers_first=DEFAULT_CONSTANTS.employers_first,
)

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
)
logger = logging.getLogger("backend")

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="OrgChart API",
    version="1.0.0",
    description="Organizational hierarchy engine — tree, departments, navigation",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        FRONTEND_URL,
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_SESSIONS: Dict[str, HierarchySession] = {}

# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------


class SnapshotRequest(BaseModel):
    employees: List[Dict[str, Any]] = []
    employers: List[Dict[str, Any]] = []


class OpenDepartmentRequest(BaseModel):
    head_id: int


class SearchRequest(BaseModel):
    query: str = ""


class NodeRequest(BaseModel):
    node_id: int


# ---------------------------------------------------------------------------
# Core helpers
# ---------------------------------------------------------------------------


def _get_session(session_id: str) -> HierarchySession:
    session = _SESSIONS.get(session_id)
    if session is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown session: {session_id!r}",
        )
    return session


def _session_view(session_id: str, session: HierarchySession) -> dict:
    return {"session_id": session_id, **session.to_dict()}


def _project(req: SnapshotRequest) -> dict:
    """
    Stateless build: tree, flat list, departments, diagnostics.
    This is the core operation behind POST /hierarchy.
    """
    employees = normalize_employees(req.employees)
    employers = normalize_employers(req.employers)

    root, report = build_tree_with_report(employees, employers, CONSTANTS)
    departments = extract_departments(root, employers)

    return {
        "snapshot_hash": snapshot_hash(employees, employers),
        "tree": root.to_dict(),
        "nodes": [n.to_dict(include_children=False) for n in flatten_tree(root)],
        "departments": [d.to_dict() for d in departments],
        "build_report": report.to_dict(),
        "diagnostics": compute_diagnostics(root, report, departments),
        "issues": collect_tree_issues(root, employees, employers),
    }


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health")
def health() -> dict:
    return {"ok": True, "sessions": len(_SESSIONS)}


@app.post("/hierarchy")
def build_hierarchy(req: SnapshotRequest) -> dict:
    try:
        return _project(req)
    except RecordError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


@app.put("/sessions/{session_id}/snapshot")
def load_snapshot(session_id: str, req: SnapshotRequest) -> dict:
    session = _SESSIONS.get(session_id)
    if session is None:
        session = HierarchySession(CONSTANTS)
        _SESSIONS[session_id] = session
        logger.info("Created session %r", session_id)
    try:
        rebuilt = session.load_snapshot(req.employees, req.employers)
    except RecordError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {**_session_view(session_id, session), "rebuilt": rebuilt}


@app.get("/sessions/{session_id}")
def get_session(session_id: str, include_tree: bool = False) -> dict:
    session = _get_session(session_id)
    return {"session_id": session_id, **session.to_dict(include_tree=include_tree)}


@app.post("/sessions/{session_id}/open-department")
def open_department(session_id: str, req: OpenDepartmentRequest) -> dict:
    session = _get_session(session_id)
    session.open_department(req.head_id)
    return _session_view(session_id, session)


@app.post("/sessions/{session_id}/reset")
def reset_view(session_id: str) -> dict:
    session = _get_session(session_id)
    session.reset_view()
    return _session_view(session_id, session)


@app.post("/sessions/{session_id}/search")
def search(session_id: str, req: SearchRequest) -> dict:
    session = _get_session(session_id)
    session.handle_search(req.query)
    return _session_view(session_id, session)


@app.post("/sessions/{session_id}/focus")
def focus(session_id: str, req: NodeRequest) -> dict:
    session = _get_session(session_id)
    session.focus_person(req.node_id)
    return _session_view(session_id, session)


@app.post("/sessions/{session_id}/toggle")
def toggle(session_id: str, req: NodeRequest) -> dict:
    session = _get_session(session_id)
    expanded = session.toggle_node(req.node_id)
    return {**_session_view(session_id, session), "toggled": req.node_id, "manual_open": expanded}


@app.delete("/sessions/{session_id}")
def delete_session(session_id: str) -> dict:
    _get_session(session_id)
    del _SESSIONS[session_id]
    logger.info("Deleted session %r", session_id)
    return {"ok": True, "session_id": session_id}
