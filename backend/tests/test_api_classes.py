"""
Tests d'intégration API pour les classes et leurs élèves.
"""


# ============================================================
# /api/v1/classes
# ============================================================

def test_list_classes(client):
    response = client.get("/api/v1/classes")

    assert response.status_code == 200
    data = response.json()
    assert [c["name"] for c in data] == ["Class 10A", "Class 11A"]
    assert data[0]["nb_students"] == 3


def test_create_class_succes(client):
    response = client.post("/api/v1/classes", json={"name": "Class 9C", "subject_ids": ["subj-eng"]})

    assert response.status_code == 201
    assert response.json()["subject_ids"] == ["subj-eng"]
    assert response.json()["nb_students"] == 0


def test_create_class_nom_duplique(client):
    response = client.post("/api/v1/classes", json={"name": "CLASS 10A"})
    assert response.status_code == 409


def test_create_class_matiere_inconnue(client):
    response = client.post("/api/v1/classes", json={"name": "Class 9C", "subject_ids": ["subj-x"]})
    assert response.status_code == 404


def test_get_class_inexistante(client):
    assert client.get("/api/v1/classes/class-x").status_code == 404


def test_update_class_renommage(client):
    response = client.put(
        "/api/v1/classes/class-10a",
        json={"name": "Section A", "subject_ids": ["subj-math", "subj-sci"]},
    )

    assert response.status_code == 200
    students = client.get("/api/v1/classes/class-10a/students").json()
    assert [s["roll_number"] for s in students] == ["SECTIONA-001", "SECTIONA-002", "SECTIONA-003"]
    assert students[2]["subject_ids"] == ["subj-math", "subj-sci"]


def test_update_class_champs_manquants(client):
    assert client.put("/api/v1/classes/class-10a", json={"name": "X"}).status_code == 422


def test_delete_class(client):
    assert client.delete("/api/v1/classes/class-10a").status_code == 204
    assert client.get("/api/v1/classes/class-10a").status_code == 404
    assert client.get("/api/v1/classes/class-10a/students").status_code == 404


def test_list_class_subjects(client):
    response = client.get("/api/v1/classes/class-11a/subjects")
    assert [s["name"] for s in response.json()] == ["Mathematics", "History"]


# ============================================================
# /api/v1/classes/{id}/students
# ============================================================

def test_list_students_filtre_matiere(client):
    response = client.get("/api/v1/classes/class-10a/students", params={"subject_id": "subj-sci"})

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == ["stu-amit", "stu-chen"]


def test_create_student(client):
    response = client.post(
        "/api/v1/classes/class-10a/students",
        json={"name": "Elena", "subject_ids": ["subj-eng", "subj-hist"]},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["roll_number"] == "CLASS10A-004"
    assert data["subject_ids"] == ["subj-eng"]
    assert data["photo_url"]


def test_create_student_nom_vide(client):
    response = client.post("/api/v1/classes/class-10a/students", json={"name": ""})
    assert response.status_code == 422


def test_update_student_partiel(client):
    response = client.put("/api/v1/classes/class-10a/students/stu-amit", json={"photo_url": None})

    assert response.status_code == 200
    data = response.json()
    assert data["photo_url"] is None
    assert data["name"] == "Amit Sharma"
    assert data["roll_number"] == "CLASS10A-001"


def test_update_student_inexistant(client):
    response = client.put("/api/v1/classes/class-10a/students/stu-x", json={"name": "X"})
    assert response.status_code == 404


def test_delete_student(client):
    assert client.delete("/api/v1/classes/class-10a/students/stu-bina").status_code == 204
    assert client.delete("/api/v1/classes/class-10a/students/stu-bina").status_code == 404
