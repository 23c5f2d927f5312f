from fastapi import APIRouter

from tiller_server.evaluations.router import router as evaluations_router
from tiller_server.jobs.router import router as jobs_router
from tiller_server.operator.router import router as operator_router

router = APIRouter()
router.include_router(operator_router)
router.include_router(jobs_router)
router.include_router(evaluations_router)
