"""
Données par défaut utilisées au premier lancement et à chaque reseed
(version absente ou différente, données illisibles).
"""

import random
from typing import Optional

from attendease.config import settings
from attendease.schemas.app_data import AppData
from attendease.schemas.school_class import ClassItem
from attendease.schemas.student import Student
from attendease.schemas.subject import Subject
from attendease.services.roll_numbers import generate_roll_number

DEFAULT_SUBJECTS = [
    ("subj-math", "Mathematics"),
    ("subj-sci", "Science"),
    ("subj-eng", "English"),
    ("subj-hist", "History"),
    ("subj-phy", "Physics"),
    ("subj-chem", "Chemistry"),
    ("subj-bio", "Biology"),
    ("subj-cs", "Computer Science"),
]

DEFAULT_CLASSES = [
    ("class-10a", "Class 10A", ["subj-math", "subj-sci", "subj-eng", "subj-hist"]),
    ("class-10b", "Class 10B", ["subj-math", "subj-sci", "subj-eng", "subj-hist"]),
    ("class-11a", "Class 11A", ["subj-math", "subj-sci", "subj-eng", "subj-phy", "subj-chem"]),
    ("class-11b", "Class 11B", ["subj-math", "subj-sci", "subj-eng", "subj-bio", "subj-cs"]),
]

FIRST_NAMES = [
    "Aarav", "Aditi", "Amit", "Ananya", "Arjun", "Bina", "Chen", "Diya", "Elena", "Farah",
    "Gabriel", "Hana", "Ishaan", "Jonas", "Kavya", "Liam", "Maya", "Nikhil", "Olivia", "Priya",
    "Rahul", "Sara", "Tariq", "Uma", "Vikram", "Yusuf", "Zoe",
]

LAST_NAMES = [
    "Sharma", "Patel", "Gupta", "Khan", "Singh", "Rao", "Iyer", "Fernandes", "Mehta", "Nair",
    "Martin", "Dubois", "Garcia", "Silva", "Kim", "Okafor",
]


def _random_students(rng: random.Random, class_item: ClassItem, count: int) -> None:
    for i in range(count):
        k = rng.randint(1, len(class_item.subject_ids)) if class_item.subject_ids else 0
        chosen = set(rng.sample(class_item.subject_ids, k))
        student = Student(
            id=f"{class_item.id}-student-{i + 1}",
            name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
            roll_number=generate_roll_number(class_item),
            photo_url=settings.PLACEHOLDER_PHOTO_URL,
            class_id=class_item.id,
            # ordre des matières de la classe conservé
            subject_ids=[sid for sid in class_item.subject_ids if sid in chosen],
        )
        class_item.students.append(student)


def build_default_data(rng: Optional[random.Random] = None) -> AppData:
    """Construit un agrégat complet : 8 matières, 4 classes, élèves aléatoires."""
    rng = rng or random.Random(settings.SEED_RANDOM_SEED)
    subjects = [Subject(id=sid, name=name) for sid, name in DEFAULT_SUBJECTS]
    classes = []
    for class_id, name, subject_ids in DEFAULT_CLASSES:
        class_item = ClassItem(id=class_id, name=name, subject_ids=list(subject_ids))
        count = rng.randint(settings.SEED_MIN_STUDENTS, settings.SEED_MAX_STUDENTS)
        _random_students(rng, class_item, count)
        classes.append(class_item)
    return AppData(subjects=subjects, classes=classes)
