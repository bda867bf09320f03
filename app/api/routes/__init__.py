from fastapi import APIRouter
from app.api.routes import tools, chat, exports, health

api_router = APIRouter()

# Include all route modules
api_router.include_router(health.router)
api_router.include_router(tools.router)
api_router.include_router(chat.router)
api_router.include_router(exports.router)
