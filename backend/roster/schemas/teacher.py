"""
Schémas Pydantic pour les enseignants.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator

from roster.schemas.base import PermittedParams, blank_to_none
from roster.schemas.student import StudentResponse


class TeacherParams(PermittedParams):
    """Champs autorisés pour un enseignant : name, age, visited."""
    name: Optional[str] = None
    age: Optional[str] = None
    visited: Optional[bool] = None

    @field_validator("visited", mode="before")
    @classmethod
    def empty_is_none(cls, v):
        return blank_to_none(v)


class TeacherResponse(BaseModel):
    """Représentation JSON d'un enseignant (liste)."""
    id: int
    name: Optional[str]
    age: Optional[str]
    visited: bool
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}

    @field_validator("visited", mode="before")
    @classmethod
    def null_is_false(cls, v):
        return bool(v)


class TeacherDetailResponse(TeacherResponse):
    """Détail d'un enseignant avec ses élèves (GET /teachers/{id})."""
    students: List[StudentResponse] = []
