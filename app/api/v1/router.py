"""API v1 router aggregation."""

from fastapi import APIRouter

from app.api.v1 import (
    announcements,
    auth,
    classes,
    donations,
    enrollments,
    health,
    mentors,
    programs,
    schedules,
    students,
    users,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(students.router, prefix="/students", tags=["Students"])
api_router.include_router(mentors.router, prefix="/mentors", tags=["Mentors"])
api_router.include_router(programs.router, prefix="/programs", tags=["Programs"])
api_router.include_router(classes.router, prefix="/classes", tags=["Classes"])
api_router.include_router(enrollments.router, prefix="/enrollments", tags=["Enrollments"])
api_router.include_router(schedules.router, prefix="/schedules", tags=["Schedules"])
api_router.include_router(announcements.router, prefix="/announcements", tags=["Announcements"])
api_router.include_router(donations.router, prefix="/donations", tags=["Donations"])
