from fastapi import APIRouter

from career_digest.api.v1.achievements import router as achievements_router
from career_digest.api.v1.digests import router as digests_router
from career_digest.api.v1.documents import router as documents_router
from career_digest.api.v1.profile import router as profile_router
from career_digest.api.v1.projects import router as projects_router
from career_digest.api.v1.settings_github import router as settings_github_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(digests_router)
api_router.include_router(achievements_router)
api_router.include_router(projects_router)
api_router.include_router(profile_router)
api_router.include_router(documents_router)
api_router.include_router(settings_github_router)
