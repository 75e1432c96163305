from fastapi import APIRouter

from leave_ledger.api.applications import applications_router
from leave_ledger.api.ledger import employee_ledger_router
from leave_ledger.api.overrides import employee_overrides_router
from leave_ledger.api.settings import leave_settings_router

api_router = APIRouter()
api_router.include_router(applications_router)
api_router.include_router(employee_ledger_router)
api_router.include_router(employee_overrides_router)
api_router.include_router(leave_settings_router)
