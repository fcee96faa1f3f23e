from fastapi import APIRouter

from linkgateway.web.routes.pages import router as pages_router

ui_router = APIRouter(include_in_schema=False)
ui_router.include_router(pages_router)
