from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from scorecard.exceptions import InvalidRecordError, NotFoundError, SnapshotError
from scorecard.logger import get_logger
from scorecard.scorecard_service import ScorecardService

router = APIRouter()
logger = get_logger("api")


def get_scorecard_service() -> ScorecardService:
    return ScorecardService()


class ProgressUpdateRequest(BaseModel):
    update_text: str
    author: str
    percent_complete: Optional[float] = Field(default=None, ge=0, le=100)
    rag_status: Optional[str] = None  # "Not Started" and "Not_Started" both accepted
    metrics: Optional[Dict[str, Any]] = None


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})


def _call(fn, *args, **kwargs):
    """Run a service call, translating scorecard errors to HTTP errors."""
    try:
        return fn(*args, **kwargs)
    except NotFoundError as exc:
        raise _error(404, "NOT_FOUND", exc.message)
    except InvalidRecordError as exc:
        raise _error(400, "BAD_REQUEST", exc.message)
    except SnapshotError as exc:
        logger.error("Snapshot unavailable: %s", exc.get_user_message())
        raise _error(500, "INTERNAL_ERROR", "Scorecard data is unavailable")


@router.get("/org-tree")
async def get_org_tree(root_id: Optional[int] = None, depth: Optional[int] = None):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_org_tree, root_id=root_id, depth=depth)}


@router.get("/goal-tree/{org_id}")
async def get_goal_tree(org_id: int):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_goal_tree, org_id)}


@router.get("/scorecard")
async def get_scorecard(year: Optional[int] = None, org_unit_id: Optional[int] = None):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_scorecard, year=year, org_unit_id=org_unit_id)}


@router.get("/scorecard/summary")
async def get_scorecard_summary():
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_summary)}


@router.get("/programs/{program_id}/objectives")
async def get_quarterly_objectives(program_id: int, year: Optional[int] = None, quarter: Optional[str] = None):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_quarterly_objectives, program_id, year=year, quarter=quarter)}


@router.get("/alignments")
async def get_alignments(goal_id: Optional[int] = None, alignment_type: Optional[str] = None):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_alignment_map, goal_id=goal_id, alignment_type=alignment_type)}


@router.get("/goals/{goal_id}")
async def get_goal_details(goal_id: int):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_goal_details, goal_id)}


@router.get("/people/{person_name}/goals")
async def get_goals_for_person(person_name: str):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_goals_for_person, person_name)}


@router.get("/progress/{program_id}")
async def get_progress(program_id: int, latest: bool = False):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_progress, program_id, latest=latest)}


@router.post("/progress/{program_id}")
async def add_progress_update(program_id: int, req: ProgressUpdateRequest):
    """Append a versioned progress update; the version is assigned here, never by the client."""
    service = _call(get_scorecard_service)
    update = _call(
        service.add_progress_update,
        program_id,
        update_text=req.update_text,
        author=req.author,
        percent_complete=req.percent_complete,
        rag_status=req.rag_status,
        metrics=req.metrics,
    )
    return {"data": update}


@router.get("/progress/{program_id}/timeline")
async def get_progress_timeline(program_id: int):
    service = _call(get_scorecard_service)
    return {"data": _call(service.get_context_timeline, program_id)}
