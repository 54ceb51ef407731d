from fastapi import APIRouter

from ...infrastructure.config import get_settings
from .v1 import router as v1_router

router = APIRouter(prefix=get_settings().API_PREFIX)
router.include_router(v1_router)
