"""
EcoViz — Calculation Routes
Footprint calculation, optional AI analysis and storage.
"""

import math
import uuid
import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ecoviz.api.deps import get_calculation_store, get_recommendation_service
from ecoviz.schemas.schemas import (
    CalculationRequest, CalculationResponse, CalculationHistory, CalculationSummary,
    FootprintBreakdown,
)
from ecoviz.services.ai_analysis import RecommendationService
from ecoviz.services.storage import CalculationStore, StorageError
from ecoviz.utils.carbon import calculate_carbon_footprint, reference_averages

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/calculate",
    response_model=CalculationResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
    summary="Calculate a carbon footprint",
    description="Estimate annual emissions from lifestyle data and store the result.",
)
async def calculate(
    request: CalculationRequest,
    store: CalculationStore = Depends(get_calculation_store),
    advisor: RecommendationService = Depends(get_recommendation_service),
):
    """Calculate, analyse and store a user's carbon footprint."""
    footprint = calculate_carbon_footprint(request.data)
    if not math.isfinite(footprint.total):
        logger.info(f"Rejected calculation for user {request.user_id}: non-finite footprint")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid request data",
        )
    calculation_id = str(uuid.uuid4())

    ai_analysis = None
    if advisor.enabled:
        ai_analysis = await advisor.recommend(footprint.total, request.data)

    try:
        await store.save(
            user_id=request.user_id,
            calculation_id=calculation_id,
            footprint=footprint,
            calculation_data=request.data.model_dump(by_alias=True),
            ai_analysis=ai_analysis,
        )
    except StorageError as e:
        logger.error(f"Error storing calculation: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to store calculation",
        )

    return CalculationResponse(
        user_id=request.user_id,
        calculation_id=calculation_id,
        carbon_footprint=footprint.total,
        breakdown=FootprintBreakdown(**footprint.breakdown()),
        ai_analysis=ai_analysis,
        averages=reference_averages(),
        message="Carbon footprint calculation stored successfully",
    )


@router.get(
    "/calculations/{user_id}",
    response_model=CalculationHistory,
    summary="List stored calculations",
    description="Get a user's most recent calculations, newest first.",
)
async def list_calculations(
    user_id: str,
    limit: int = Query(20, ge=1, le=100),
    store: CalculationStore = Depends(get_calculation_store),
):
    try:
        records = await store.list_for_user(user_id, limit=limit)
    except StorageError as e:
        logger.error(f"Error loading calculations: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load calculations",
        )

    return CalculationHistory(
        user_id=user_id,
        calculations=[
            CalculationSummary(
                calculation_id=r.id,
                user_id=r.user_id,
                carbon_footprint=r.carbon_footprint,
                breakdown=FootprintBreakdown(**r.breakdown),
                ai_analysis=r.ai_analysis,
                created_at=r.created_at,
            )
            for r in records
        ],
    )
