"""
Tests unitaires pour le service de gestion des classes.
"""

import pytest

from attendease.exceptions import DuplicateError, NotFoundError, ValidationError
from attendease.schemas.school_class import ClassCreate, ClassUpdate
from attendease.schemas.student import StudentCreate
from attendease.services import class_service, student_service
from attendease.services.store import AppStore


def rolls(store, class_id):
    return [s.roll_number for s in class_service.get_class(store, class_id).students]


# --- create_class ---

def test_create_class_succes(store, port):
    school_class = class_service.create_class(
        store, ClassCreate(name=" Class 9C ", subject_ids=["subj-eng", "subj-math", "subj-eng"])
    )

    assert school_class.name == "Class 9C"
    assert school_class.id.startswith("class-class-9c-")
    assert school_class.subject_ids == ["subj-eng", "subj-math"]
    assert school_class.students == []
    assert AppStore(port).load().classes[-1].name == "Class 9C"


def test_create_class_nom_duplique(store):
    with pytest.raises(DuplicateError, match="existe déjà"):
        class_service.create_class(store, ClassCreate(name="class 10a"))


def test_create_class_nom_vide(store):
    with pytest.raises(ValidationError):
        class_service.create_class(store, ClassCreate(name="  "))


def test_create_class_matiere_inconnue(store):
    with pytest.raises(NotFoundError):
        class_service.create_class(store, ClassCreate(name="Class 9C", subject_ids=["subj-x"]))
    assert class_service.get_class_by_name(store, "Class 9C") is None


# --- lecture ---

def test_get_classes_copie(store):
    classes = class_service.get_classes(store)
    assert [c.id for c in classes] == ["class-10a", "class-11a"]

    classes[0].students.clear()
    assert len(class_service.get_class(store, "class-10a").students) == 3


def test_get_class_inexistante(store):
    assert class_service.get_class(store, "class-x") is None


def test_find_class_retourne_une_copie(store):
    school_class = class_service.find_class(store, "class-10a")
    school_class.name = "Modifié"
    school_class.students.clear()

    live = class_service.get_class(store, "class-10a")
    assert live.name == "Class 10A"
    assert len(live.students) == 3
    assert class_service.find_class(store, "class-x") is None


def test_get_subjects_for_class_ordre_global(store):
    school_class = class_service.create_class(
        store, ClassCreate(name="Class 9C", subject_ids=["subj-hist", "subj-math"])
    )
    subjects = class_service.get_subjects_for_class(store, school_class.id)
    assert [s.name for s in subjects] == ["Mathematics", "History"]


def test_get_subjects_for_class_inexistante(store):
    with pytest.raises(NotFoundError):
        class_service.get_subjects_for_class(store, "class-x")


# --- update_class ---

def test_update_class_renommage_regenere_les_matricules(store, port):
    class_service.update_class(
        store, "class-10a", ClassUpdate(name="Section A", subject_ids=["subj-math", "subj-sci", "subj-eng"])
    )

    assert rolls(store, "class-10a") == ["SECTIONA-001", "SECTIONA-002", "SECTIONA-003"]
    reloaded = AppStore(port).load().classes[0]
    assert reloaded.name == "Section A"
    assert reloaded.students[2].roll_number == "SECTIONA-003"


def test_update_class_renommage_apres_suppression_renumerote(store):
    student_service.delete_student(store, "class-10a", "stu-bina")
    class_service.update_class(
        store, "class-10a", ClassUpdate(name="10X", subject_ids=["subj-math", "subj-sci", "subj-eng"])
    )
    assert rolls(store, "class-10a") == ["10X-001", "10X-002"]


def test_update_class_sans_renommage_garde_les_matricules(store):
    student_service.create_student(store, "class-10a", StudentCreate(name="Elena"))
    before = rolls(store, "class-10a")

    class_service.update_class(store, "class-10a", ClassUpdate(name="Class 10A", subject_ids=["subj-math"]))

    assert rolls(store, "class-10a") == before


def test_update_class_retrait_de_matiere_desinscrit_les_eleves(store):
    class_service.update_class(store, "class-10a", ClassUpdate(name="Class 10A", subject_ids=["subj-math"]))

    school_class = class_service.get_class(store, "class-10a")
    assert [s.subject_ids for s in school_class.students] == [["subj-math"], ["subj-math"], ["subj-math"]]
    for student in school_class.students:
        assert set(student.subject_ids) <= set(school_class.subject_ids)


def test_update_class_nom_d_une_autre_classe(store):
    with pytest.raises(DuplicateError):
        class_service.update_class(store, "class-10a", ClassUpdate(name="CLASS 11A", subject_ids=[]))
    assert class_service.get_class(store, "class-10a").subject_ids == ["subj-math", "subj-sci", "subj-eng"]


def test_update_class_inexistante(store):
    with pytest.raises(NotFoundError):
        class_service.update_class(store, "class-x", ClassUpdate(name="X", subject_ids=[]))


def test_update_class_nom_vide(store):
    with pytest.raises(ValidationError):
        class_service.update_class(store, "class-10a", ClassUpdate(name="", subject_ids=[]))


# --- delete_class ---

def test_delete_class_supprime_les_eleves(store, port):
    class_service.delete_class(store, "class-10a")

    data = AppStore(port).load()
    assert [c.id for c in data.classes] == ["class-11a"]
    assert all(s.class_id != "class-10a" for c in data.classes for s in c.students)


def test_delete_class_inexistante(store):
    with pytest.raises(NotFoundError):
        class_service.delete_class(store, "class-x")
