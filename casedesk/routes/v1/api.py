from fastapi import APIRouter

from casedesk.cases.router import router as cases_router
from casedesk.documents.router import router as documents_router

api_router = APIRouter()

api_router.include_router(cases_router)
api_router.include_router(documents_router)
