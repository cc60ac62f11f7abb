"""
Configuration partagée pour tous les tests.
Le magasin repose sur un support clé-valeur en mémoire : aucune base réelle n'est touchée.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from attendease.dependencies import get_store  # noqa: E402
from attendease.main import app  # noqa: E402
from attendease.schemas.app_data import AppData  # noqa: E402
from attendease.schemas.school_class import ClassItem  # noqa: E402
from attendease.schemas.student import Student  # noqa: E402
from attendease.schemas.subject import Subject  # noqa: E402
from attendease.services.persistence import MemoryKeyValueStore  # noqa: E402
from attendease.services.store import CURRENT_VERSION, AppStore  # noqa: E402

PHOTO = "https://placehold.co/100x100.png"


def make_student(student_id, name, roll_number, class_id, subject_ids):
    return Student(
        id=student_id,
        name=name,
        roll_number=roll_number,
        photo_url=PHOTO,
        class_id=class_id,
        subject_ids=list(subject_ids),
    )


def make_app_data() -> AppData:
    """
    Jeu de données réduit :
    - Class 10A (math, sci, eng) : Amit (math, sci), Bina (math), Chen (math, sci, eng)
    - Class 11A (math, hist) : Diya (math, hist)
    """
    return AppData(
        version=CURRENT_VERSION,
        subjects=[
            Subject(id="subj-math", name="Mathematics"),
            Subject(id="subj-sci", name="Science"),
            Subject(id="subj-eng", name="English"),
            Subject(id="subj-hist", name="History"),
        ],
        classes=[
            ClassItem(
                id="class-10a",
                name="Class 10A",
                subject_ids=["subj-math", "subj-sci", "subj-eng"],
                students=[
                    make_student("stu-amit", "Amit Sharma", "CLASS10A-001", "class-10a", ["subj-math", "subj-sci"]),
                    make_student("stu-bina", "Bina Rao", "CLASS10A-002", "class-10a", ["subj-math"]),
                    make_student(
                        "stu-chen", "Chen Kim", "CLASS10A-003", "class-10a",
                        ["subj-math", "subj-sci", "subj-eng"],
                    ),
                ],
            ),
            ClassItem(
                id="class-11a",
                name="Class 11A",
                subject_ids=["subj-math", "subj-hist"],
                students=[
                    make_student("stu-diya", "Diya Nair", "CLASS11A-001", "class-11a", ["subj-math", "subj-hist"]),
                ],
            ),
        ],
    )


@pytest.fixture
def port():
    return MemoryKeyValueStore()


@pytest.fixture
def store(port):
    """Magasin initialisé avec make_app_data() et déjà écrit sur le support."""
    s = AppStore(port, seed_factory=make_app_data)
    s.save(make_app_data())
    return s


@pytest.fixture
def client(store):
    """Client HTTP de test branché sur le magasin en mémoire."""
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
