"""
Modèle SQLAlchemy pour la table teachers.
Un enseignant possède zéro ou plusieurs élèves (students.teacher_id).
"""

from sqlalchemy import Boolean, Column, DateTime, Integer, Text, func
from sqlalchemy.orm import relationship

from roster.database import Base


class Teacher(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=True)
    age = Column(Text, nullable=True)
    visited = Column(Boolean, default=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Pas de cascade : la suppression d'un enseignant qui a encore des élèves est refusée
    students = relationship(
        "Student",
        back_populates="teacher",
        order_by="Student.id",
        passive_deletes="all",
    )
