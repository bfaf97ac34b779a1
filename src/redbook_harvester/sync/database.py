"""SQL sink for normalized patent rows."""

from __future__ import annotations

from typing import Iterable, Mapping

from sqlalchemy import Column, DateTime, Integer, Text, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base
from sqlalchemy.sql import func

from redbook_harvester.models import STORAGE_KEYS

Base = declarative_base()


class PatentGrant(Base):  # type: ignore[misc, valid-type]
    __tablename__ = "patent_grants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_number = Column(Text, nullable=True, index=True)
    record_type = Column(Text, nullable=True)
    language = Column(Text, nullable=True)
    country = Column(Text, nullable=True)
    date_produced = Column(Text, nullable=True)
    date_published = Column(Text, nullable=True)
    dtd_version = Column(Text, nullable=True)
    file_name = Column(Text, nullable=True, index=True)
    patent_status = Column(Text, nullable=True)
    patent_claims = Column(Text, nullable=True)  # JSON array as text
    invention_title = Column(Text, nullable=True)
    invention_id = Column(Text, nullable=True)
    loaded_at = Column(DateTime(timezone=True), server_default=func.now())


def create_db_engine(database_url: str) -> Engine:
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(bind=engine)
    return engine


def row_to_model(row: Mapping[str, str | None]) -> PatentGrant:
    values = {attr: row.get(key) for attr, key in STORAGE_KEYS.items()}
    return PatentGrant(**values)


def save_rows(
    database_url: str | None,
    rows: Iterable[Mapping[str, str | None]],
    *,
    engine: Engine | None = None,
) -> int:
    """Insert storage rows; returns the number written."""

    if engine is None:
        if not database_url:
            return 0
        engine = create_db_engine(database_url)
    else:
        Base.metadata.create_all(bind=engine)
    models = [row_to_model(row) for row in rows]
    if not models:
        return 0
    with Session(engine) as session:
        session.add_all(models)
        session.commit()
    return len(models)


__all__ = [
    "Base",
    "PatentGrant",
    "create_db_engine",
    "row_to_model",
    "save_rows",
]
