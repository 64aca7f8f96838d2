#!/usr/bin/env python3

import re
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import Table, insert
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.schema import CreateTable

from ..errors import PersistenceError
from ..models import NormalizedData, RunMetadata, GENERATOR_NAME
from .base import StorageInterface
from .schema import TABLES, properties_table

logger = logging.getLogger(__name__)

DIALECTS = {
    'sqlite': sqlite.dialect,
    'mysql': mysql.dialect,
    'postgresql': postgresql.dialect,
}

INSERT_PATTERN = re.compile(
    r"INSERT INTO\s+[`\"]?(\w+)[`\"]?\s*\(([^)]*)\)\s*VALUES\s*\(",
    re.IGNORECASE
)
NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d*)?(?:[eE][-+]?\d+)?")


class ScriptStorage(StorageInterface):
    """
    Writes a generated data set as a static SQL script.

    The script holds `CREATE TABLE IF NOT EXISTS` statements followed by
    one literal INSERT per row; it never talks to a database. Statements are
    written as they come, so a failed run leaves a truncated file.
    """

    def __init__(self, path: str, dialect: str = 'sqlite'):
        """
        Initialize the script storage.

        Args:
            path: Output file
            dialect: SQL dialect to render statements for ('sqlite', 'mysql' or 'postgresql')
        """
        if dialect not in DIALECTS:
            raise ValueError(f"Unsupported dialect: {dialect}. Expected one of {sorted(DIALECTS)}")
        self.path = Path(path)
        # Named parameters keep percent signs in string literals undoubled
        self.dialect = DIALECTS[dialect](paramstyle='named')
        self._file = None
        self.statement_count = 0

    def prepare(self) -> None:
        try:
            self._file = open(self.path, 'w', encoding='utf-8')
        except OSError as e:
            raise PersistenceError("script", str(self.path), e) from e
        logger.info(f"Writing SQL script to {self.path}")
        self._write(f"-- Generated by {GENERATOR_NAME}\n")
        for table in TABLES:
            ddl = str(CreateTable(table, if_not_exists=True).compile(dialect=self.dialect)).strip()
            self._write(f"{ddl};\n")

    def save_metadata(self, metadata: RunMetadata) -> None:
        for key, value in metadata.to_properties():
            self._write_insert(properties_table, {'id': key, 'value': value})

    def save_source(self, data: NormalizedData) -> None:
        logger.info(f"Writing {data.source}: {data.counts()}")
        self._write(f"-- {data.source}\n")
        for table, values, _, _ in self.iter_rows(data):
            self._write_insert(table, values)

    def _write_insert(self, table: Table, values: Dict[str, Any]) -> None:
        statement = insert(table).values(**values).compile(
            dialect=self.dialect, compile_kwargs={"literal_binds": True}
        )
        self._write(f"{statement};\n")
        self.statement_count += 1

    def _write(self, text: str) -> None:
        if self._file is None:
            raise PersistenceError("script", str(self.path), RuntimeError("script not prepared"))
        try:
            self._file.write(text)
        except OSError as e:
            raise PersistenceError("script", str(self.path), e) from e

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            logger.info(f"Wrote {self.statement_count} INSERT statements to {self.path}")


def _parse_values(text: str, pos: int) -> Tuple[List[Any], int]:
    """Read a comma separated list of SQL literals up to the closing parenthesis."""
    values: List[Any] = []
    while True:
        while text[pos].isspace():
            pos += 1
        if text[pos] == "'":
            # Quotes inside strings are doubled
            chars = []
            pos += 1
            while True:
                if text[pos] == "'":
                    if pos + 1 < len(text) and text[pos + 1] == "'":
                        chars.append("'")
                        pos += 2
                        continue
                    pos += 1
                    break
                chars.append(text[pos])
                pos += 1
            values.append(''.join(chars))
        elif text[pos:pos + 4].upper() == 'NULL':
            values.append(None)
            pos += 4
        else:
            m = NUMBER_PATTERN.match(text, pos)
            if not m:
                raise ValueError(f"Unexpected SQL literal at offset {pos}: {text[pos:pos + 20]!r}")
            literal = m.group(0)
            values.append(float(literal) if any(c in literal for c in '.eE') else int(literal))
            pos = m.end()
        while text[pos].isspace():
            pos += 1
        if text[pos] == ')':
            return values, pos + 1
        if text[pos] != ',':
            raise ValueError(f"Expected ',' or ')' at offset {pos}")
        pos += 1


def parse_script(text: str, table: Optional[str] = None) -> Dict[str, List[Dict[str, Any]]]:
    """
    Read back the rows inserted by a script written by ScriptStorage.

    String literals are decoded with standard quote doubling, as rendered
    for the sqlite and postgresql dialects.

    Args:
        text: Script content
        table: Only return rows of this table

    Returns:
        Mapping of table name to its rows, in script order
    """
    rows: Dict[str, List[Dict[str, Any]]] = {}
    pos = 0
    while True:
        m = INSERT_PATTERN.search(text, pos)
        if not m:
            break
        name = m.group(1)
        columns = [c.strip().strip('`"') for c in m.group(2).split(',')]
        values, pos = _parse_values(text, m.end())
        if len(values) != len(columns):
            raise ValueError(f"INSERT INTO {name}: {len(columns)} columns but {len(values)} values")
        if table is None or name == table:
            rows.setdefault(name, []).append(dict(zip(columns, values)))
    return rows
