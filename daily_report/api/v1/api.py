# daily_report/api/v1/api.py
from fastapi import APIRouter
from daily_report.api.v1.endpoints import admin, admin_reports, auth, invitation_codes, logs, reports, setup

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(setup.router, prefix="/setup", tags=["Setup"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])

api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(admin_reports.router, prefix="/admin/reports", tags=["Admin"])
api_router.include_router(invitation_codes.router, prefix="/admin/invitation-codes", tags=["Admin"])
api_router.include_router(logs.router, prefix="/admin/log", tags=["Admin"])
