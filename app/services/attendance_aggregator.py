"""Attendance aggregation: presence rate over a window of lessons."""
import logging
from typing import List, Dict, Any

from app.schemas.evaluation import AttendanceEntry, AttendanceStatus, AttendanceSummary
from app.services.grade_aggregator import round_half_up

logger = logging.getLogger(__name__)

# Justified absences and medical certificates count as presence
VALID_PRESENCE = {
    AttendanceStatus.PRESENTE,
    AttendanceStatus.FALTA_JUSTIFICADA,
    AttendanceStatus.ATESTADO,
}


def attendance_rate(entries: List[AttendanceEntry]) -> AttendanceSummary:
    """Presence rate in percent; zero lessons gives rate 0 with total_classes 0."""
    total = len(entries)
    present = sum(1 for e in entries if e.status == AttendanceStatus.PRESENTE)
    justified = sum(1 for e in entries if e.status == AttendanceStatus.FALTA_JUSTIFICADA)
    with_certificate = sum(1 for e in entries if e.status == AttendanceStatus.ATESTADO)
    valid = present + justified + with_certificate

    rate = round_half_up(valid / total * 100) if total > 0 else 0.0

    return AttendanceSummary(
        total_classes=total,
        valid_presences=valid,
        rate=rate,
        present=present,
        justified=justified,
        with_certificate=with_certificate,
        absent=total - valid,
    )


def check_minimum_attendance(entries: List[AttendanceEntry], minimum_rate: float = 75.0) -> Dict[str, Any]:
    summary = attendance_rate(entries)
    return {
        "meets_requirement": summary.rate >= minimum_rate,
        "attendance_rate": summary.rate,
        "total_classes": summary.total_classes,
        "valid_presences": summary.valid_presences,
        "absences": summary.absent,
    }


def low_attendance(
    students: Dict[int, List[AttendanceEntry]],
    minimum_rate: float = 75.0,
) -> List[Dict[str, Any]]:
    """Students whose rate is below the minimum, lowest rate first."""
    flagged = []
    for student_id, entries in students.items():
        summary = attendance_rate(entries)
        if summary.rate < minimum_rate:
            flagged.append({"student_id": student_id, **summary.model_dump()})

    logger.info("%d of %d students below %.2f%% attendance", len(flagged), len(students), minimum_rate)
    return sorted(flagged, key=lambda s: s["rate"])
