"""
Service métier pour les enseignants.
Accès aux données (lecture, création, modification, suppression) et règles de validation.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from roster.database import is_row_id
from roster.errors import DestroyFailed, RecordNotFound
from roster.models.student import Student
from roster.models.teacher import Teacher
from roster.schemas.teacher import TeacherParams
from roster.services.result import SaveResult

logger = logging.getLogger(__name__)


def list_teachers(db: Session) -> List[Teacher]:
    """Retourne tous les enseignants, triés par identifiant."""
    return db.execute(select(Teacher).order_by(Teacher.id)).scalars().all()


def find_teacher(db: Session, teacher_id: int) -> Teacher:
    """
    Charge un enseignant par son identifiant.
    Lève RecordNotFound s'il n'existe pas : aucune action imbriquée ne doit continuer.
    """
    if not is_row_id(teacher_id):
        raise RecordNotFound("Teacher", teacher_id)
    teacher = db.get(Teacher, teacher_id)
    if teacher is None:
        raise RecordNotFound("Teacher", teacher_id)
    return teacher


def build_teacher(params: Optional[TeacherParams] = None) -> Teacher:
    """Enseignant non enregistré, pour le formulaire de création."""
    teacher = Teacher(visited=False)
    if params is not None:
        _assign(teacher, params)
    return teacher


def validate_teacher(teacher: Teacher) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = {}
    if not (teacher.name or "").strip():
        errors["name"] = ["can't be blank"]
    return errors


def create_teacher(db: Session, params: TeacherParams) -> SaveResult:
    """Crée un enseignant. Aucune ligne n'est écrite si la validation échoue."""
    teacher = build_teacher(params)
    errors = validate_teacher(teacher)
    if errors:
        return SaveResult(teacher, errors)

    db.add(teacher)
    db.commit()
    db.refresh(teacher)
    logger.info("Enseignant créé : %s (%s)", teacher.name, teacher.id)
    return SaveResult(teacher)


def update_teacher(db: Session, teacher: Teacher, params: TeacherParams) -> SaveResult:
    """Met à jour les champs soumis. Les champs absents ne sont pas modifiés."""
    _assign(teacher, params)
    errors = validate_teacher(teacher)
    if errors:
        return SaveResult(teacher, errors)

    db.commit()
    db.refresh(teacher)
    logger.info("Enseignant modifié : %s", teacher.id)
    return SaveResult(teacher)


def delete_teacher(db: Session, teacher: Teacher) -> None:
    """
    Supprime un enseignant.
    Refusé (DestroyFailed) tant qu'il possède encore des élèves.
    """
    nb_students = db.execute(
        select(func.count())
        .select_from(Student)
        .where(Student.teacher_id == teacher.id)
    ).scalar() or 0

    if nb_students:
        raise DestroyFailed("Cannot delete record because of dependent students")

    db.delete(teacher)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DestroyFailed(f"Failed to destroy Teacher with id={teacher.id}") from exc
    logger.info("Enseignant supprimé : %s", teacher.id)


def _assign(teacher: Teacher, params: TeacherParams) -> None:
    for field, value in params.changes().items():
        if field == "visited":
            value = bool(value)
        setattr(teacher, field, value)
