from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import france_geo.models  # noqa: F401
from france_geo.db.base import Base
from france_geo.db.session import get_db
from france_geo.domain.unit_of_work import UnitOfWork
from france_geo.main import app
from france_geo.models.city_model import City
from france_geo.models.department_model import Department


# In-memory SQLite shared by every connection of a single test
SQLALCHEMY_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def engine():
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=engine, expire_on_commit=False
    )
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def uow(db_session: Session) -> UnitOfWork:
    return UnitOfWork(db_session)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def herault(db_session: Session) -> Department:
    department = Department(department_code="34", department_name="Hérault")
    db_session.add(department)
    db_session.commit()
    db_session.refresh(department)
    return department


@pytest.fixture
def paris_department(db_session: Session) -> Department:
    department = Department(department_code="75", department_name="Paris")
    db_session.add(department)
    db_session.commit()
    db_session.refresh(department)
    return department


@pytest.fixture
def montpellier(db_session: Session, herault: Department) -> City:
    city = City(city_name="Montpellier", population=295542, department=herault)
    db_session.add(city)
    db_session.commit()
    db_session.refresh(city)
    return city


@pytest.fixture
def paris(db_session: Session, paris_department: Department) -> City:
    city = City(city_name="Paris", population=2165423, department=paris_department)
    db_session.add(city)
    db_session.commit()
    db_session.refresh(city)
    return city


@pytest.fixture
def herault_cities(db_session: Session, herault: Department) -> list[City]:
    """A handful of Hérault cities, including a population tie."""
    cities = [
        City(city_name="Montpellier", population=295542, department=herault),
        City(city_name="Béziers", population=79041, department=herault),
        City(city_name="Sète", population=44558, department=herault),
        City(city_name="Agde", population=29000, department=herault),
        City(city_name="Lunel", population=29000, department=herault),
        City(city_name="Hameau", population=0, department=herault),
    ]
    db_session.add_all(cities)
    db_session.commit()
    return cities
