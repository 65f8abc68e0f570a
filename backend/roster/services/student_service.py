"""
Service métier pour les élèves.
Toutes les opérations passent par l'enseignant propriétaire, déjà résolu par l'appelant.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roster.database import is_row_id
from roster.errors import DestroyFailed, RecordNotFound
from roster.models.student import Student
from roster.models.teacher import Teacher
from roster.schemas.student import StudentParams
from roster.services.result import SaveResult

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "gender", "grade")


def list_students(db: Session, teacher: Teacher) -> List[Student]:
    """Retourne les élèves de l'enseignant, triés par identifiant."""
    return db.execute(
        select(Student)
        .where(Student.teacher_id == teacher.id)
        .order_by(Student.id)
    ).scalars().all()


def find_student(db: Session, teacher: Teacher, student_id: int) -> Student:
    """
    Charge un élève de cet enseignant.
    Un élève qui existe mais appartient à un autre enseignant est considéré introuvable.
    """
    if not is_row_id(student_id):
        raise RecordNotFound("Student", student_id)
    student = db.execute(
        select(Student).where(
            Student.id == student_id,
            Student.teacher_id == teacher.id,
        )
    ).scalar_one_or_none()
    if student is None:
        raise RecordNotFound("Student", student_id)
    return student


def build_student(teacher: Teacher, params: Optional[StudentParams] = None) -> Student:
    """
    Élève non enregistré rattaché à l'enseignant.
    À la création, l'enseignant de l'URL reste propriétaire même si teacher_id est soumis.
    """
    student = Student(teacher_id=teacher.id, attended=False)
    if params is not None:
        _assign(student, params, exclude=("teacher_id",))
    return student


def validate_student(db: Session, student: Student) -> Dict[str, List[str]]:
    """Règles de l'entité : champs obligatoires et enseignant existant."""
    errors: Dict[str, List[str]] = {}
    for field in REQUIRED_FIELDS:
        if not (getattr(student, field) or "").strip():
            errors[field] = ["can't be blank"]
    if not is_row_id(student.teacher_id) or db.get(Teacher, student.teacher_id) is None:
        errors["teacher"] = ["must exist"]
    return errors


def create_student(db: Session, teacher: Teacher, params: StudentParams) -> SaveResult:
    """Crée un élève pour l'enseignant. Aucune ligne n'est écrite si la validation échoue."""
    student = build_student(teacher, params)
    errors = validate_student(db, student)
    if errors:
        return SaveResult(student, errors)

    db.add(student)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Création d'élève refusée par la base (enseignant %s)", teacher.id)
        return SaveResult(student, {"teacher": ["must exist"]})
    db.refresh(student)
    logger.info("Élève créé : %s (%s) pour l'enseignant %s", student.name, student.id, teacher.id)
    return SaveResult(student)


def update_student(db: Session, student: Student, params: StudentParams) -> SaveResult:
    """
    Applique uniquement les champs autorisés effectivement soumis.
    En cas d'échec rien n'est flushé : la ligne en base reste inchangée
    et l'objet garde les valeurs saisies pour réafficher le formulaire.
    """
    _assign(student, params)
    errors = validate_student(db, student)
    if errors:
        return SaveResult(student, errors)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return SaveResult(student, {"teacher": ["must exist"]})
    db.refresh(student)
    logger.info("Élève modifié : %s", student.id)
    return SaveResult(student)


def delete_student(db: Session, student: Student) -> None:
    """Suppression stricte : une erreur de la base lève DestroyFailed."""
    db.delete(student)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DestroyFailed(f"Failed to destroy Student with id={student.id}") from exc
    logger.info("Élève supprimé : %s", student.id)


def _assign(student: Student, params: StudentParams, exclude=()) -> None:
    for field, value in params.changes().items():
        if field in exclude:
            continue
        if field == "attended":
            value = bool(value)
        setattr(student, field, value)
