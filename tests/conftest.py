"""
Shared fixtures: an in-memory SQLite database per test, a TestClient wired
to it through dependency_overrides, and bearer tokens for an owner and a
tenant login.
"""
from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_session
from dependencies import create_access_token
from main import app
from models import Base, Room, RoomStatus, Tenant, TenantStatus, User, UserRole


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def owner(db):
    user = User(email="owner@example.com", full_name="Priya Owner", role=UserRole.ADMIN)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def owner_headers(owner):
    return {"Authorization": f"Bearer {create_access_token(owner.id, UserRole.ADMIN)}"}


@pytest.fixture
def room(db, owner):
    room = Room(
        owner_id=owner.id,
        room_number="101",
        room_type="double",
        rent_amount=Decimal("8000.00"),
        capacity=2,
        status=RoomStatus.VACANT,
    )
    db.add(room)
    db.commit()
    return room


@pytest.fixture
def tenant_user(db):
    user = User(email="rahul@example.com", full_name="Rahul Sharma", role=UserRole.TENANT)
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def tenant(db, owner, room, tenant_user):
    tenant = Tenant(
        owner_id=owner.id,
        user_id=tenant_user.id,
        room_id=room.id,
        full_name="Rahul Sharma",
        email="rahul@example.com",
        phone="9876543210",
        join_date=date(2024, 1, 15),
        check_in_date=date(2024, 1, 15),
        deposit_amount=Decimal("16000.00"),
        status=TenantStatus.ACTIVE,
    )
    db.add(tenant)
    db.commit()
    return tenant


@pytest.fixture
def tenant_headers(tenant, tenant_user):
    return {"Authorization": f"Bearer {create_access_token(tenant_user.id, UserRole.TENANT)}"}
