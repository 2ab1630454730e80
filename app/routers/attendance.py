from fastapi import APIRouter, HTTPException, status

from app.config import settings
from app.schemas.evaluation import AttendanceSummary
from app.schemas.standings import AttendanceSummaryRequest, LowAttendanceRequest
from app.services.attendance_aggregator import attendance_rate, low_attendance

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/summary", response_model=AttendanceSummary)
def attendance_summary(payload: AttendanceSummaryRequest):
    """Presence rate and breakdown for a set of attendance entries."""
    return attendance_rate(payload.attendance)


@router.post("/low")
def list_low_attendance(payload: LowAttendanceRequest):
    """
    List students below the minimum attendance rate, lowest first.

    Falls back to the configured alert threshold when no minimum is given.
    """
    if any(s.student_id is None for s in payload.students):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Every student must have a student_id"
        )

    minimum = payload.minimum_rate if payload.minimum_rate is not None else settings.attendance_alert_percent
    return low_attendance(
        {s.student_id: s.attendance for s in payload.students},
        minimum_rate=minimum,
    )
