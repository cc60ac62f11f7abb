"""
Tests d'intégration API pour l'import CSV des élèves.
POST /api/v1/students/upload
"""

CSV = b'Student Name,Class Name,Subjects\nAmit,Class 10A,"Mathematics,Science"\nBina,Class 99Z,Mathematics\n'


def upload(client, content, filename="eleves.csv", content_type="text/csv"):
    return client.post(
        "/api/v1/students/upload",
        files={"file": (filename, content, content_type)},
    )


def test_upload_rapport(client):
    response = upload(client, CSV)

    assert response.status_code == 200
    data = response.json()
    assert data["success_count"] == 1
    assert data["error_count"] == 1
    assert "Class 99Z" in data["errors"][0]

    students = client.get("/api/v1/classes/class-10a/students").json()
    assert students[-1]["name"] == "Amit"


def test_upload_colonnes_manquantes(client):
    response = upload(client, b"Name,Class\nAmit,Class 10A\n")

    assert response.status_code == 200
    assert response.json()["success_count"] == 0
    assert response.json()["error_count"] == 1


def test_upload_format_invalide(client):
    response = upload(client, CSV, filename="eleves.pdf", content_type="application/pdf")
    assert response.status_code == 400


def test_upload_fichier_vide(client):
    response = upload(client, b"")
    assert response.status_code == 400


def test_upload_encodage_invalide(client):
    response = upload(client, "Student Name,Class Name,Subjects\nÉlodie,Class 10A,\n".encode("latin-1"))
    assert response.status_code == 400


def test_upload_fichier_manquant(client):
    assert client.post("/api/v1/students/upload").status_code == 422
