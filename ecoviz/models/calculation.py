"""
EcoViz — Calculation Model
One stored carbon footprint calculation.
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Text, Float, JSON

from ecoviz.core.database import Base


class Calculation(Base):
    __tablename__ = "calculations"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(255), nullable=False, index=True)
    carbon_footprint = Column(Float, nullable=False)
    breakdown = Column(JSON, nullable=False)  # housing, transportation, food, consumption
    calculation_data = Column(JSON, nullable=False)
    ai_analysis = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    def __repr__(self):
        return f"<Calculation(id='{self.id}', user_id='{self.user_id}', total={self.carbon_footprint})>"
