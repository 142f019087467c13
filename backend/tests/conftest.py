"""Test fixtures: in-memory SQLite database and fakes for the bot and identity service."""
from __future__ import annotations

import os
import uuid
from typing import Dict, List, Optional

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SENSOR_FEED_ENABLED"] = "false"
os.environ.pop("TELEGRAM_BOT_TOKEN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from hydromon.database import Base, get_db
from hydromon.dependencies import get_bot, get_identity_client
from hydromon.errors import BotApiError, IdentityServiceError
from hydromon.main import app
from hydromon.models import PlantProfile, SensorReading, SystemConfig


class FakeBot:
    """Records outgoing Telegram calls instead of performing them."""

    def __init__(self):
        self.sent: List[tuple] = []
        self.webhooks: List[str] = []
        self.fail_send = False

    async def send_message(self, chat_id, text):
        if self.fail_send:
            raise BotApiError("Bad Gateway", status_code=502)
        self.sent.append((chat_id, text))
        return {"message_id": len(self.sent)}

    async def get_me(self):
        return {"id": 1, "is_bot": True, "username": "hydro_test_bot"}

    async def replace_webhook(self, url):
        self.webhooks.append(url)


class FakeIdentity:
    """In-memory identity admin API."""

    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.fail_on: Optional[str] = None
        self.calls: List[tuple] = []

    def _maybe_fail(self, op: str):
        if self.fail_on == op:
            raise IdentityServiceError(f"{op} rejected", status_code=422, details="fake failure")

    async def create_user(self, email, password):
        self.calls.append(("create", email))
        self._maybe_fail("create")
        user_id = str(uuid.uuid4())
        self.users[user_id] = {"id": user_id, "email": email, "password": password}
        return {"id": user_id, "email": email}

    async def update_user(self, user_id, email, password=None):
        self.calls.append(("update", user_id, email))
        self._maybe_fail("update")
        user = self.users.setdefault(user_id, {"id": user_id})
        user["email"] = email
        if password:
            user["password"] = password
        return dict(user)

    async def delete_user(self, user_id):
        self.calls.append(("delete", user_id))
        self._maybe_fail("delete")
        self.users.pop(user_id, None)


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_bot():
    return FakeBot()


@pytest.fixture
def fake_identity():
    return FakeIdentity()


@pytest.fixture
def client(session_factory, fake_bot, fake_identity):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_bot] = lambda: fake_bot
    app.dependency_overrides[get_identity_client] = lambda: fake_identity
    yield TestClient(app)
    app.dependency_overrides.clear()


def add_plant(db, name, ph_min, ph_max, ec_min, ec_max) -> PlantProfile:
    plant = PlantProfile(name=name, ph_min=ph_min, ph_max=ph_max, ec_min=ec_min, ec_max=ec_max)
    db.add(plant)
    db.commit()
    db.refresh(plant)
    return plant


def add_reading(db, **fields) -> SensorReading:
    values = {"ph": 6.0, "ec": 1.5, "water_temperature": 21.0, "plant_name": "Lettuce"}
    values.update(fields)
    reading = SensorReading(**values)
    db.add(reading)
    db.commit()
    db.refresh(reading)
    return reading


def select_plant(db, plant_id) -> SystemConfig:
    config = db.query(SystemConfig).first() or SystemConfig()
    config.selected_plant_id = plant_id
    db.add(config)
    db.commit()
    return config
