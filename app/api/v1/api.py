# app/api/v1/api.py
from fastapi import APIRouter

from app.api.v1.endpoints.data_route import router as data_router
from app.api.v1.endpoints.student_route import router as student_router
from app.api.v1.endpoints.course_route import router as course_router
from app.api.v1.endpoints.enrollment_route import router as enrollment_router
from app.api.v1.endpoints.payment_route import router as payment_router

api_router = APIRouter()

# --- Bao gồm các routers vào router chính ---
api_router.include_router(data_router, prefix="/data", tags=["Data"])
api_router.include_router(student_router, prefix="/students", tags=["Students"])
api_router.include_router(course_router, prefix="/courses", tags=["Courses"])
api_router.include_router(enrollment_router, prefix="/enrollments", tags=["Enrollments"])
api_router.include_router(payment_router, prefix="/payments", tags=["Payments"])
