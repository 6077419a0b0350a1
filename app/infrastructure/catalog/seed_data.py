from __future__ import annotations

from datetime import date, timedelta

from app.domain.entities.course import Course, CourseSession

DEMO_COURSES: list[Course] = [
    Course(
        id="course-efaw",
        title="Emergency First Aid at Work",
        description="One-day HSE-compliant course covering the essentials of workplace first aid.",
        duration="1 day",
        price=95.0,
        category="Workplace",
    ),
    Course(
        id="course-faw",
        title="First Aid at Work",
        description="Three-day qualification for appointed workplace first aiders.",
        duration="3 days",
        price=245.0,
        category="Workplace",
    ),
    Course(
        id="course-paed",
        title="Paediatric First Aid",
        description="Two-day course for childcare and early-years settings.",
        duration="2 days",
        price=160.0,
        category="Childcare",
    ),
    Course(
        id="course-frec3",
        title="FREC Level 3",
        description="First Response Emergency Care for event and pre-hospital staff.",
        duration="5 days",
        price=650.0,
        category="Pre-hospital",
    ),
    Course(
        id="course-aed",
        title="Basic Life Support & AED",
        description="Half-day CPR and defibrillator refresher.",
        duration="Half day",
        price=55.0,
        category="Workplace",
        is_active=False,
    ),
]

# (course id, days from today, start time, location, spots)
_SESSION_PLAN: list[tuple[str, int, str, str, int]] = [
    ("course-efaw", 7, "09:00", "Manchester Training Centre", 12),
    ("course-efaw", 21, "09:00", "Leeds Training Centre", 12),
    ("course-faw", 14, "09:30", "Manchester Training Centre", 10),
    ("course-paed", 10, "09:00", "Birmingham Training Centre", 8),
    ("course-paed", 28, "09:00", "Birmingham Training Centre", 0),
]


def demo_sessions(today: date) -> list[CourseSession]:
    """Sessions dated relative to `today`; FREC Level 3 deliberately has none."""
    return [
        CourseSession(
            id=f"session-{index + 1}",
            course_id=course_id,
            session_date=today + timedelta(days=offset),
            start_time=start_time,
            location=location,
            available_spots=spots,
        )
        for index, (course_id, offset, start_time, location, spots) in enumerate(_SESSION_PLAN)
    ]
