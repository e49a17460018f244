"""
Test configuration and shared fixtures for the Medical Center test suite.

Uses an in-memory SQLite database per test. Tables are created from the
model metadata before each test and dropped afterwards, so every test starts
from an empty schema. Migrations are exercised separately in
unit/test_migrations.py.
"""

import os

# Must be set before any application module reads core.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import uuid
from datetime import date, time
from typing import Dict, Generator, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, func
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core.database import create_tables, drop_tables, get_db
from main import app
from models import (
    Appointment, AppointmentStatus, City, Doctor, MedicalCenter, Specialty, User, UserRole,
)
from services.jwt_service import JWTService
from services.password_service import PasswordService

DEFAULT_PASSWORD = "password123"


@pytest.fixture(scope="function")
def db_engine():
    """
    Create a fresh in-memory database for a single test.

    StaticPool keeps one connection alive so the schema survives across
    sessions and the TestClient threadpool.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(bind=engine)

    yield engine

    drop_tables(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Provide a database session configured like SessionLocal."""
    TestingSession = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine,
        expire_on_commit=False,
    )
    session = TestingSession()

    yield session

    session.close()


@pytest.fixture
def enforce_foreign_keys(db_engine) -> None:
    """
    Turn on SQLite foreign key checks for the test's shared connection.

    SQLite ignores REFERENCES clauses unless asked; PostgreSQL always
    enforces them. Request this fixture before any data fixtures.
    """
    with db_engine.connect() as conn:
        conn.exec_driver_sql("PRAGMA foreign_keys=ON")
        assert conn.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


@pytest.fixture
def client(db_session) -> Generator[TestClient, None, None]:
    """TestClient whose requests share the test's database session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.pop(get_db, None)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(secret_key=os.environ["JWT_SECRET_KEY"])


@pytest.fixture
def admin_user(db_session) -> User:
    return create_user(db_session, email="admin@example.com", role=UserRole.ADMIN, name="Admin User")


@pytest.fixture
def patient_user(db_session) -> User:
    return create_user(db_session, email="patient@example.com", role=UserRole.PATIENT, name="Pat Patient")


@pytest.fixture
def doctor(db_session) -> Doctor:
    """A doctor profile with its own user, medical center and specialty."""
    return create_doctor(db_session)


# Helper functions for building test data
def create_user(
    db_session: Session,
    email: str,
    role: UserRole = UserRole.PATIENT,
    name: str = "Test User",
    dni: Optional[str] = None,
    password: str = DEFAULT_PASSWORD
) -> User:
    """
    Create a user directly in the database.

    Args:
        db_session: Database session
        email: User's email (must be unique)
        role: User's role
        name: Display name (at least 3 characters)
        dni: 10-character national ID; a random unique one is generated when omitted
        password: Plaintext password, stored hashed

    Returns:
        The committed User
    """
    user = User(
        dni=dni or uuid.uuid4().hex[:10],
        name=name,
        email=email,
        password=PasswordService.hash_password(password),
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    return user


def create_medical_center(
    db_session: Session,
    name: str = "Hospital Metropolitano",
    city: City = City.QUITO,
    active: bool = True
) -> MedicalCenter:
    center = MedicalCenter(name=name, address="Av. Mariana de Jesus", city=city, active=active)
    db_session.add(center)
    db_session.commit()
    return center


def create_specialty(
    db_session: Session,
    name: Optional[str] = None,
    specialty_id: Optional[int] = None,
    description: Optional[str] = None
) -> Specialty:
    """Create a specialty; the ID defaults to one past the current maximum."""
    if specialty_id is None:
        specialty_id = (db_session.query(func.max(Specialty.id)).scalar() or 0) + 1
    specialty = Specialty(
        id=specialty_id,
        name=name or f"Specialty {specialty_id}",
        description=description,
    )
    db_session.add(specialty)
    db_session.commit()
    return specialty


def create_doctor(
    db_session: Session,
    user: Optional[User] = None,
    medical_center: Optional[MedicalCenter] = None,
    specialty: Optional[Specialty] = None
) -> Doctor:
    """
    Create a doctor profile, creating any missing user, center or specialty.

    Returns:
        The committed Doctor
    """
    if user is None:
        user = create_user(
            db_session,
            email=f"doctor-{uuid.uuid4().hex[:8]}@example.com",
            role=UserRole.DOCTOR,
            name="Dr. Test",
        )
    medical_center = medical_center or create_medical_center(db_session)
    specialty = specialty or create_specialty(db_session)

    doctor = Doctor(
        user_id=user.id,
        medical_center_id=medical_center.id,
        specialty_id=specialty.id,
    )
    db_session.add(doctor)
    db_session.commit()
    return doctor


def create_appointment(
    db_session: Session,
    patient: User,
    doctor: Doctor,
    appointment_date: date = date(2030, 1, 15),
    appointment_time: time = time(10, 0),
    status: AppointmentStatus = AppointmentStatus.PENDING
) -> Appointment:
    appointment = Appointment(
        patient_id=patient.id,
        doctor_id=doctor.id,
        appointment_date=appointment_date,
        appointment_time=appointment_time,
        status=status,
    )
    db_session.add(appointment)
    db_session.commit()
    return appointment


def auth_headers(user: User) -> Dict[str, str]:
    """Authorization header carrying a valid token for the user."""
    token = JWTService(secret_key=os.environ["JWT_SECRET_KEY"]).issue_token(user)
    return {"Authorization": f"Bearer {token}"}
