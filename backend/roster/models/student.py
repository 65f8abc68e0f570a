"""
Modèle SQLAlchemy pour la table students.
Chaque élève appartient à exactement un enseignant existant.
"""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from roster.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=True)
    gender = Column(Text, nullable=True)
    grade = Column(Text, nullable=True)
    attended = Column(Boolean, default=False)
    teacher_id = Column(
        Integer,
        ForeignKey("teachers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    teacher = relationship("Teacher", back_populates="students")
