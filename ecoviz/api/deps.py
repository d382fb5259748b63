"""
EcoViz — Collaborator Dependencies
Overridable through app.dependency_overrides.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ecoviz.core.database import get_db
from ecoviz.services.ai_analysis import RecommendationService
from ecoviz.services.mailer import Mailer
from ecoviz.services.storage import CalculationStore


def get_calculation_store(db: AsyncSession = Depends(get_db)) -> CalculationStore:
    return CalculationStore(db)


def get_recommendation_service() -> RecommendationService:
    return RecommendationService()


def get_mailer() -> Mailer:
    return Mailer()
