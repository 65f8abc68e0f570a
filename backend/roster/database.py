"""
Configuration de la connexion à la base de données.
PostgreSQL en production, SQLite accepté pour le développement et les tests.
"""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from roster.config import settings


def _engine_options(url: str) -> dict:
    """Options du moteur selon le dialecte (SQLite partage une seule connexion en mémoire)."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {}
    options = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, **_engine_options(settings.DATABASE_URL))


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite n'applique les clés étrangères que si on le demande à chaque connexion
    if engine.dialect.name == "sqlite":
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Plus grande clé primaire représentable (entier signé 64 bits de SQLite)
MAX_ROW_ID = 2**63 - 1


def is_row_id(value) -> bool:
    """Vrai si la valeur peut désigner une ligne : un identifiant hors plage n'existe jamais."""
    return isinstance(value, int) and 1 <= value <= MAX_ROW_ID


def init_db() -> None:
    """Crée les tables teachers et students si elles n'existent pas encore."""
    import roster.models  # noqa: F401 — enregistre les modèles dans Base.metadata

    Base.metadata.create_all(bind=engine)


def get_db():
    """Dépendance FastAPI — fournit une session BDD et la ferme après usage."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
