"""
Schedule API endpoints for the orchestrator
"""

from fastapi import APIRouter, HTTPException

from ..schemas import ActionsRequest, PlanWeekRequest, ResolveRequest, ScheduleResponse
from ..scheduling.core.models import InvalidEventError, ScheduleInput
from ..services.scheduler_service import scheduler_service

router = APIRouter()


@router.post("/plan", response_model=ScheduleResponse)
async def plan_week(request: PlanWeekRequest):
    """
    Place routines, lock-ins, one-off events and deadlines, allocate study hours,
    then resolve conflicts.
    """
    try:
        return scheduler_service.plan_and_resolve(request.buckets, request.study_plan)
    except InvalidEventError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/generate", response_model=ScheduleResponse)
async def generate_schedule(schedule_input: ScheduleInput):
    """Build an urgency-ranked study plan from course metadata."""
    try:
        return scheduler_service.generate_and_resolve(schedule_input)
    except (InvalidEventError, ValueError) as e:
        # ValueError also covers unparseable week_of / exam dates
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/resolve", response_model=ScheduleResponse)
async def resolve_conflicts(request: ResolveRequest):
    """Resolve overlaps in an already-assembled calendar."""
    try:
        return scheduler_service.resolve(request.events, request.day_start, request.day_end)
    except InvalidEventError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/actions", response_model=ScheduleResponse)
async def apply_actions(request: ActionsRequest):
    """Apply add/modify/delete/exclude_date actions, then resolve conflicts."""
    try:
        return scheduler_service.apply_actions(request.calendar, request.actions)
    except InvalidEventError as e:
        raise HTTPException(status_code=400, detail=str(e))
