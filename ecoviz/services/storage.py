"""
EcoViz — Calculation Storage
Persists calculations through an async SQLAlchemy session.
"""
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ecoviz.models.calculation import Calculation
from ecoviz.utils.carbon import CarbonFootprint

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when a calculation cannot be written or read."""


class CalculationStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def save(
        self,
        user_id: str,
        calculation_id: str,
        footprint: CarbonFootprint,
        calculation_data: dict,
        ai_analysis: Optional[str] = None,
    ) -> Calculation:
        """Store one calculation and commit it."""
        record = Calculation(
            id=calculation_id,
            user_id=user_id,
            carbon_footprint=footprint.total,
            breakdown=footprint.breakdown(),
            calculation_data=calculation_data,
            ai_analysis=ai_analysis,
        )
        try:
            self.db.add(record)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StorageError(f"Could not store calculation {calculation_id}: {e}") from e

        logger.info(f"Stored calculation {calculation_id} for user {user_id}")
        return record

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[Calculation]:
        """Most recent calculations for a user, newest first."""
        try:
            result = await self.db.execute(
                select(Calculation)
                .where(Calculation.user_id == user_id)
                .order_by(Calculation.created_at.desc())
                .limit(limit)
            )
        except SQLAlchemyError as e:
            raise StorageError(f"Could not load calculations for {user_id}: {e}") from e
        return list(result.scalars().all())
