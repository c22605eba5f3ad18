# growth_engine/api/engine_routes.py
"""
engine_routes.py
================

FastAPI router for growth classification endpoints.
"""

import logging
from typing import Dict

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..errors import ClassificationError
from ..schemas import (
    ClassifyReq, ClassifyResp, CompareReq, CompareResp, SolveRecurrenceReq, SolveRecurrenceResp,
)
from ..services import classify_core, compare_core, solve_recurrence_core

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="",
    tags=["growth-classification"],
    responses={
        400: {"description": "Invalid input"},
        500: {"description": "Internal server error"},
    },
)


@router.post("/classify", response_model=ClassifyResp)
def classify_tree(req: ClassifyReq) -> ClassifyResp:
    try:
        return classify_core(req)
    except ClassificationError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("classification crashed")
        raise HTTPException(status_code=500, detail=f"Internal classification error: {str(e)}")


@router.post("/solve-recurrence", response_model=SolveRecurrenceResp)
def solve_recurrence(req: SolveRecurrenceReq) -> SolveRecurrenceResp:
    try:
        return solve_recurrence_core(req)
    except ClassificationError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("recurrence solver crashed")
        raise HTTPException(status_code=500, detail=f"Internal solver error: {str(e)}")


@router.post("/compare", response_model=CompareResp)
def compare_growth(req: CompareReq) -> CompareResp:
    try:
        return compare_core(req)
    except ClassificationError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/health")
def health_check() -> Dict[str, str]:
    return {"status": "ok", "service": settings.APP_NAME}
