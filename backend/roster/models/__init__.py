# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre la clé étrangère students.teacher_id → teachers.id.

from roster.models.teacher import Teacher  # noqa: F401  — doit précéder student
from roster.models.student import Student  # noqa: F401
