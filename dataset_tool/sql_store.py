"""SQLAlchemy-backed dataset store."""

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, List, Optional, Sequence

from sqlalchemy import JSON, Column, DateTime, Integer, String, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared.config import get_settings

from . import models
from .exceptions import StoreError
from .store import DatasetStore

logger = logging.getLogger(__name__)

Base = declarative_base()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class DatasetRecord(Base):
    """
    Dataset table model; rows and column metadata are stored as JSON.
    """
    __tablename__ = 'datasets'

    pk = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(64), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    column_meta = Column('columns', JSON, nullable=False, default=list)
    data = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False)
    owner_id = Column(String(255), nullable=True, index=True)

    def __repr__(self):
        return f"<DatasetRecord(id={self.id}, name={self.name})>"

    def to_model(self) -> models.Dataset:
        return models.Dataset(
            id=self.id,
            name=self.name,
            columns=[models.Column(**column) for column in (self.column_meta or [])],
            data=list(self.data or []),
            created_at=_as_utc(self.created_at),
            owner_id=self.owner_id,
        )


class SqlDatasetStore(DatasetStore):
    """Dataset store on any SQLAlchemy database (SQLite by default)."""

    def __init__(self, database_url: Optional[str] = None, engine: Optional[Engine] = None):
        if engine is None:
            settings = get_settings()
            url = database_url or settings.database_url
            engine = create_engine(url, **settings.get_engine_options())
        self.engine = engine
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.init_database()

    def init_database(self) -> None:
        """Create the datasets table if needed."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.exception("Failed to initialise dataset tables")
            raise StoreError(f"Failed to initialise dataset store: {e}") from e

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session scope that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.exception("Dataset store operation failed")
            raise StoreError(f"Dataset store operation failed: {e}") from e
        finally:
            session.close()

    def create(self, name: str, rows: Sequence[models.Row], columns: Sequence[models.Column],
               owner_id: Optional[str] = None) -> models.Dataset:
        record = DatasetRecord(
            id=uuid.uuid4().hex,
            name=name,
            column_meta=[column.model_dump(mode="json") for column in columns],
            data=[dict(row) for row in rows],
            created_at=datetime.now(timezone.utc),
            owner_id=owner_id,
        )
        with self.session() as session:
            session.add(record)
            session.flush()
            dataset = record.to_model()
        logger.info(f"Saved dataset {dataset.id} '{name}' with {len(dataset.data)} rows")
        return dataset

    def list_for_owner(self, owner_id: Optional[str]) -> List[models.Dataset]:
        if owner_id is None:
            condition = DatasetRecord.owner_id.is_(None)
        else:
            condition = DatasetRecord.owner_id == owner_id
        query = (
            select(DatasetRecord)
            .where(condition)
            .order_by(DatasetRecord.created_at.desc(), DatasetRecord.pk.desc())
        )
        with self.session() as session:
            return [record.to_model() for record in session.scalars(query)]

    def get_by_id(self, dataset_id: str) -> Optional[models.Dataset]:
        query = select(DatasetRecord).where(DatasetRecord.id == dataset_id)
        with self.session() as session:
            record = session.scalars(query).first()
            return record.to_model() if record else None

    def delete_by_id(self, dataset_id: str) -> bool:
        query = select(DatasetRecord).where(DatasetRecord.id == dataset_id)
        with self.session() as session:
            record = session.scalars(query).first()
            if record is None:
                return False
            session.delete(record)
        logger.info(f"Deleted dataset {dataset_id}")
        return True

    def close(self) -> None:
        self.engine.dispose()
