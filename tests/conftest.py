import os
import sys
import pytest

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# Должно быть выставлено до импорта приложения: engine создаётся при импорте
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_students.db")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from students_service.infrastructure.db import Base, get_db
from students_service.main import app

# Тестовая БД в памяти; StaticPool, чтобы потоки TestClient видели одну и ту же базу
test_engine = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(scope="function")
def client():
    # Создаем таблицы перед каждым тестом
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    # Очищаем после теста
    app.dependency_overrides.pop(get_db, None)
    Base.metadata.drop_all(bind=test_engine)

@pytest.fixture
def student_payload():
    return {
        "name": "John Doe",
        "age": 20,
        "course": "Computer Science",
        "email": "john.doe@example.com",
        "grade": "A",
    }
