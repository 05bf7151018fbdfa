from fastapi import APIRouter

from admin_portal.api.routes import admin, locale

api_router = APIRouter()
api_router.include_router(locale.router)
api_router.include_router(admin.router)
