from fastapi import APIRouter

from smilies.api.v1.smilies import router as smilies_router

router = APIRouter()
router.include_router(smilies_router)
