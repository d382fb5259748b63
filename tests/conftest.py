"""Pytest configuration and shared fixtures."""

import copy
from typing import List

import pytest
from fastapi.testclient import TestClient

from ecoviz.api.deps import get_calculation_store, get_mailer, get_recommendation_service
from ecoviz.main import app
from ecoviz.services.mailer import MailerError
from ecoviz.services.storage import StorageError

SAMPLE_DATA = {
    "housing": {
        "type": "apartment",
        "size": 2,
        "energy": {"electricity": 1000, "naturalGas": 500, "heatingOil": 100},
    },
    "transportation": {
        "car": {"milesDriven": 10000, "fuelEfficiency": 25},
        "publicTransit": {"busMiles": 1000, "trainMiles": 500},
        "flights": {"shortHaul": 2, "longHaul": 1},
    },
    "food": {"dietType": "average", "wasteLevel": "low"},
    "consumption": {"shoppingHabits": "average", "recyclingHabits": "most"},
}


class FakeCalculationStore:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.saved: List[dict] = []
        self.records = []

    async def save(self, **record):
        if self.fail:
            raise StorageError("database unavailable")
        self.saved.append(record)
        return record

    async def list_for_user(self, user_id: str, limit: int = 20):
        if self.fail:
            raise StorageError("database unavailable")
        return self.records[:limit]


class FakeRecommendationService:
    def __init__(self, enabled: bool = True, analysis: str = "Drive less and insulate your home."):
        self.enabled = enabled
        self.analysis = analysis
        self.calls = []

    async def recommend(self, total_footprint, data):
        self.calls.append((total_footprint, data))
        return self.analysis


class FakeMailer:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []

    async def send_results(self, email, results):
        if self.fail:
            raise MailerError("connection refused")
        self.sent.append((email, results))


@pytest.fixture
def sample_data():
    return copy.deepcopy(SAMPLE_DATA)


@pytest.fixture
def store():
    return FakeCalculationStore()


@pytest.fixture
def advisor():
    return FakeRecommendationService()


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def client(store, advisor, mailer):
    """Test client with every collaborator replaced by a fake."""
    app.dependency_overrides[get_calculation_store] = lambda: store
    app.dependency_overrides[get_recommendation_service] = lambda: advisor
    app.dependency_overrides[get_mailer] = lambda: mailer
    yield TestClient(app)
    app.dependency_overrides.clear()
