"""FastAPI router for the dispute filing wizard."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from presolve.intake.controller import IntakeController
from presolve.intake.models import FilingSnapshot

router = APIRouter()

# Pseudo-fields for the two halves of ``deadline_details``.
_DEADLINE_INPUTS = {"deadline_date", "deadline_note"}


# --- Request/Response models ---


class FieldUpdateRequest(BaseModel):
    value: Any = None
    touch: bool = False


class TouchRequest(BaseModel):
    fields: list[str] = Field(default_factory=list)


class SupportRequest(BaseModel):
    visible: bool = True


class SupportContact(BaseModel):
    phone: str
    email: str


def _get_filing(request: Request, session_id: str) -> IntakeController:
    filing = request.app.state.filing_store.get(session_id)
    if filing is None:
        raise HTTPException(status_code=404, detail=f"Filing {session_id!r} not found")
    return filing


# --- Wizard endpoints ---


@router.get("/api/intake/wizard")
async def get_wizard(request: Request) -> dict[str, Any]:
    return request.app.state.wizard.model_dump()


@router.get("/api/support")
async def get_support(request: Request) -> SupportContact:
    support = request.app.state.settings.support
    return SupportContact(phone=support.phone, email=support.email)


# --- Filing endpoints ---


@router.post("/api/filings")
async def start_filing(request: Request) -> FilingSnapshot:
    return request.app.state.filing_store.create().snapshot()


@router.get("/api/filings/{session_id}")
async def get_filing(session_id: str, request: Request) -> FilingSnapshot:
    return _get_filing(request, session_id).snapshot()


@router.delete("/api/filings/{session_id}")
async def discard_filing(session_id: str, request: Request) -> dict[str, bool]:
    if not request.app.state.filing_store.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Filing {session_id!r} not found")
    return {"discarded": True}


@router.put("/api/filings/{session_id}/fields/{field}")
async def update_field(
    session_id: str, field: str, body: FieldUpdateRequest, request: Request
) -> FilingSnapshot:
    filing = _get_filing(request, session_id)
    value = "" if body.value is None else body.value
    try:
        if field == "deadline_date":
            filing.set_deadline_date(str(value))
        elif field == "deadline_note":
            filing.set_deadline_note(str(value))
        else:
            filing.update_field(field, value)
        if body.touch:
            filing.mark_touched("deadline_details" if field in _DEADLINE_INPUTS else field)
    except KeyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid value for {field!r}: {e}")
    return filing.snapshot()


@router.post("/api/filings/{session_id}/touch")
async def touch_fields(session_id: str, body: TouchRequest, request: Request) -> FilingSnapshot:
    filing = _get_filing(request, session_id)
    try:
        filing.mark_touched(*body.fields)
    except KeyError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return filing.snapshot()


@router.post("/api/filings/{session_id}/advance")
async def advance(session_id: str, request: Request) -> FilingSnapshot:
    filing = _get_filing(request, session_id)
    filing.advance()
    return filing.snapshot()


@router.post("/api/filings/{session_id}/back")
async def go_back(session_id: str, request: Request) -> FilingSnapshot:
    filing = _get_filing(request, session_id)
    filing.back()
    return filing.snapshot()


@router.post("/api/filings/{session_id}/submit")
async def submit_filing(session_id: str, request: Request) -> FilingSnapshot:
    filing = _get_filing(request, session_id)
    await filing.submit()
    return filing.snapshot()


@router.post("/api/filings/{session_id}/reset")
async def reset_filing(session_id: str, request: Request) -> FilingSnapshot:
    filing = _get_filing(request, session_id)
    filing.reset()
    return filing.snapshot()


@router.post("/api/filings/{session_id}/support")
async def toggle_support(
    session_id: str, body: SupportRequest, request: Request
) -> FilingSnapshot:
    filing = _get_filing(request, session_id)
    if body.visible:
        filing.show_support()
    else:
        filing.hide_support()
    return filing.snapshot()
