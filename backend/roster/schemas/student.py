"""
Schémas Pydantic pour les élèves.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from roster.schemas.base import PermittedParams, blank_to_none


class StudentParams(PermittedParams):
    """
    Champs autorisés pour créer ou modifier un élève :
    name, gender, grade, attended, teacher_id. Tout autre champ est ignoré.
    """
    name: Optional[str] = None
    gender: Optional[str] = None
    grade: Optional[str] = None
    attended: Optional[bool] = None
    teacher_id: Optional[int] = None

    @field_validator("attended", "teacher_id", mode="before")
    @classmethod
    def empty_is_none(cls, v):
        return blank_to_none(v)


class StudentResponse(BaseModel):
    """Représentation JSON d'un élève."""
    id: int
    name: Optional[str]
    gender: Optional[str]
    grade: Optional[str]
    attended: bool
    teacher_id: int
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    model_config = {"from_attributes": True}

    @field_validator("attended", mode="before")
    @classmethod
    def null_is_false(cls, v):
        return bool(v)
