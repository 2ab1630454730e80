"""Tests for attendance aggregation"""
from app.schemas.evaluation import AttendanceEntry, AttendanceStatus
from app.services.attendance_aggregator import attendance_rate, check_minimum_attendance, low_attendance


def make_attendance(present=0, justified=0, certificate=0, absent=0):
    return (
        [AttendanceEntry(status=AttendanceStatus.PRESENTE)] * present
        + [AttendanceEntry(status=AttendanceStatus.FALTA_JUSTIFICADA)] * justified
        + [AttendanceEntry(status=AttendanceStatus.ATESTADO)] * certificate
        + [AttendanceEntry(status=AttendanceStatus.FALTA_INJUSTIFICADA)] * absent
    )


class TestAttendanceRate:
    def test_justified_and_certificate_count_as_presence(self):
        summary = attendance_rate(make_attendance(present=3, justified=1, certificate=1, absent=3))
        assert summary.total_classes == 8
        assert summary.valid_presences == 5
        assert summary.rate == 62.5
        assert summary.present == 3
        assert summary.justified == 1
        assert summary.with_certificate == 1
        assert summary.absent == 3

    def test_no_classes(self):
        summary = attendance_rate([])
        assert summary.total_classes == 0
        assert summary.valid_presences == 0
        assert summary.rate == 0.0

    def test_rate_rounded_to_two_decimals(self):
        assert attendance_rate(make_attendance(present=2, absent=1)).rate == 66.67

    def test_full_attendance(self):
        assert attendance_rate(make_attendance(present=5)).rate == 100.0

    def test_all_absent(self):
        assert attendance_rate(make_attendance(absent=4)).rate == 0.0

    def test_status_accepts_raw_string(self):
        entry = AttendanceEntry(status="Atestado")
        assert attendance_rate([entry]).with_certificate == 1


class TestCheckMinimumAttendance:
    def test_exactly_at_minimum_meets_requirement(self):
        result = check_minimum_attendance(make_attendance(present=3, absent=1), minimum_rate=75.0)
        assert result["meets_requirement"] is True
        assert result["attendance_rate"] == 75.0
        assert result["absences"] == 1

    def test_below_minimum(self):
        result = check_minimum_attendance(make_attendance(present=1, absent=1), minimum_rate=75.0)
        assert result["meets_requirement"] is False
        assert result["valid_presences"] == 1


class TestLowAttendance:
    def test_sorted_lowest_first(self):
        students = {
            1: make_attendance(present=4),
            2: make_attendance(present=1, absent=3),
            3: make_attendance(present=2, absent=2),
            4: [],
        }
        result = low_attendance(students, minimum_rate=75.0)
        assert [s["student_id"] for s in result] == [4, 2, 3]
        assert result[1]["rate"] == 25.0

    def test_nobody_below(self):
        assert low_attendance({1: make_attendance(present=4)}) == []
