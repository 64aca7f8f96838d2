#!/usr/bin/env python3

import logging
from typing import Any, Dict

from sqlalchemy import Table, create_engine, insert
from sqlalchemy.engine import Connection
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from ..errors import AlreadyPopulatedError, PersistenceError
from ..models import NormalizedData, RunMetadata
from .base import StorageInterface
from .schema import metadata as schema_metadata, properties_table

logger = logging.getLogger(__name__)


class DatabaseStorage(StorageInterface):
    """
    Writes a generated data set to a live database.

    Any database SQLAlchemy can connect to is supported; SQLite and MySQL
    are the tested targets. Rows are inserted one at a time.

    Transaction scope:
    - schema creation and run metadata each commit on their own, before any
      entity data;
    - each source's complete entity set is written in one transaction, so a
      failure rolls back the failing source only and leaves the sources
      written before it in place.
    """

    def __init__(self, database_uri: str, **engine_kwargs):
        """
        Initialize the database storage.

        Args:
            database_uri: SQLAlchemy database URL, e.g. 'sqlite:///navdata.db'
            **engine_kwargs: Passed to sqlalchemy.create_engine (pool settings...)
        """
        self.database_uri = database_uri
        try:
            self.engine = create_engine(database_uri, **engine_kwargs)
        except SQLAlchemyError as e:
            raise PersistenceError("connection", database_uri, e) from e

    def prepare(self) -> None:
        logger.info("Preparing database schema")
        try:
            schema_metadata.create_all(self.engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise PersistenceError("schema", None, e) from e

    def save_metadata(self, metadata: RunMetadata) -> None:
        with self.engine.connect() as conn:
            for key, value in metadata.to_properties():
                try:
                    conn.execute(insert(properties_table).values(id=key, value=value))
                except IntegrityError as e:
                    conn.rollback()
                    raise AlreadyPopulatedError("property", key, e) from e
                except SQLAlchemyError as e:
                    conn.rollback()
                    raise PersistenceError("property", key, e) from e
            conn.commit()
        logger.info(f"Stored run metadata, valid {metadata.valid_from} to {metadata.valid_until}")

    def save_source(self, data: NormalizedData) -> None:
        logger.info(f"Storing {data.source}: {data.counts()}")
        with self.engine.begin() as conn:
            for table, values, operation, identifier in self.iter_rows(data):
                self._insert(conn, table, values, operation, identifier)

    def _insert(self, conn: Connection, table: Table, values: Dict[str, Any],
                operation: str, identifier: str) -> None:
        try:
            conn.execute(insert(table).values(**values))
        except SQLAlchemyError as e:
            raise PersistenceError(operation, identifier, e) from e

    def close(self) -> None:
        self.engine.dispose()
