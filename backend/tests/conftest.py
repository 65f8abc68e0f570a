"""
Configuration partagée pour tous les tests.
Deux clients HTTP :
- client    : la dépendance get_db renvoie une session MagicMock (aucune base) ;
- db_client : base SQLite en mémoire, tables recréées pour chaque test.
"""

import os

# Doit précéder l'import de l'application : le moteur est créé à l'import de roster.database
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from roster.database import Base, SessionLocal, engine, get_db
from roster.main import app
from roster.models.student import Student
from roster.models.teacher import Teacher


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def client(mock_db):
    """Client HTTP de test avec la BDD mockée."""
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    """Session sur une base SQLite en mémoire, vidée après chaque test."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_client(db):
    """Client HTTP de test branché sur la base SQLite (une session par requête)."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def teacher(db):
    t = Teacher(name="Grace Hopper", age="45", visited=False)
    db.add(t)
    db.commit()
    db.refresh(t)
    return t


@pytest.fixture
def make_student(db):
    def _make(teacher, **kwargs):
        s = Student(
            teacher_id=teacher.id,
            name=kwargs.get("name", "Ada"),
            gender=kwargs.get("gender", "F"),
            grade=kwargs.get("grade", "10"),
            attended=kwargs.get("attended", False),
        )
        db.add(s)
        db.commit()
        db.refresh(s)
        return s

    return _make
