"""API router configuration."""

from fastapi import APIRouter

from api.v1.routes.boards import router as boards_router
from api.v1.routes.invitations import router as invitations_router
from api.v1.routes.tasks import router as tasks_router
from api.v1.routes.teams import router as teams_router
from api.v1.routes.users import router as users_router
from api.v1.routes.workspaces import router as workspaces_router

router = APIRouter()
router.include_router(invitations_router)
router.include_router(users_router)
router.include_router(workspaces_router)
router.include_router(boards_router)
router.include_router(tasks_router)
router.include_router(teams_router)
