"""
Shared fixtures: a throwaway SQLite database, an HTTP client bound to the
app, and factories for users, species, records and reviews.
"""
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Must be set before any lepinet module reads settings
_DB_DIR = tempfile.mkdtemp(prefix="lepinet-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_DB_DIR) / 'test.db'}"
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest

from lepinet.core.security import create_access_token
from lepinet.db.database import AsyncSessionLocal, drop_db, engine, init_db
from lepinet.main import app
from lepinet.models import (
    ConfidenceLevel,
    ExpertReview,
    ObservationRecord,
    Species,
    TrainingStatus,
    UserRole,
    VerificationStatus,
)
from lepinet.services.users import user_service

PASSWORD = "butterfly"


@pytest.fixture(autouse=True)
async def database():
    await drop_db()
    await init_db()
    yield
    await engine.dispose()


@pytest.fixture
async def db():
    async with AsyncSessionLocal() as session:
        yield session


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': str(user.id)})}"}


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    async def _make(
        role: UserRole = UserRole.USER,
        status: VerificationStatus = VerificationStatus.NONE,
        email: str = None,
        first_name: str = "Test",
        last_name: str = "User",
    ):
        counter["n"] += 1
        return await user_service.create_user(
            db,
            email=email or f"user{counter['n']}@example.com",
            password=PASSWORD,
            first_name=first_name,
            last_name=last_name,
            role=role,
            verification_status=status,
        )

    return _make


@pytest.fixture
async def admin(make_user):
    return await make_user(UserRole.ADMIN, VerificationStatus.VERIFIED, email="admin@example.com")


@pytest.fixture
async def expert(make_user):
    return await make_user(UserRole.EXPERT, VerificationStatus.VERIFIED, email="expert@example.com")


@pytest.fixture
async def observer(make_user):
    return await make_user(email="observer@example.com")


@pytest.fixture
async def species(db):
    rows = [
        Species(
            butterfly_id="BF001",
            common_name_english="Common Mormon",
            common_name_sinhalese="Podu Mormon",
            species_name_binomial="Papilio polytes",
            family="Papilionidae",
        ),
        Species(
            butterfly_id="BF002",
            common_name_english="Blue Mormon",
            species_name_binomial="Papilio polymnestor",
            family="Papilionidae",
        ),
        Species(
            butterfly_id="BF003",
            common_name_english="Lemon Pansy",
            species_name_binomial="Junonia lemonias",
            family="Nymphalidae",
        ),
    ]
    db.add_all(rows)
    await db.commit()
    return rows


@pytest.fixture
def make_record(db, species):
    async def _make(
        owner=None,
        predicted_id: str = "BF001",
        predicted_name: str = "Common Mormon",
        final_name: str = None,
        created_at: datetime = None,
    ):
        record = ObservationRecord(
            user_id=owner.id if owner is not None else None,
            image_url="https://images.example.com/butterfly.jpg",
            predicted_id=predicted_id,
            predicted_species_name=predicted_name,
            predicted_confidence=0.9,
            user_action="accepted",
            final_species_name=final_name,
            created_at=created_at or datetime.now(timezone.utc),
        )
        db.add(record)
        await db.commit()
        return record

    return _make


@pytest.fixture
def make_review(db):
    async def _make(
        record,
        reviewer,
        identified: str = "Common Mormon",
        agreed: bool = True,
        confidence: ConfidenceLevel = ConfidenceLevel.CERTAIN,
        training_status: TrainingStatus = TrainingStatus.PENDING,
        age_minutes: int = 0,
    ):
        review = ExpertReview(
            ai_log_id=record.id,
            reviewer_id=reviewer.id,
            agreed_with_ai=agreed,
            identified_species_name=identified,
            confidence_level=confidence,
            training_status=training_status,
            created_at=datetime.now(timezone.utc) - timedelta(minutes=age_minutes),
        )
        db.add(review)
        await db.commit()
        return review

    return _make
