"""
Tests for DatabaseStorage against temporary SQLite databases.
"""

import pytest
from sqlalchemy import create_engine, func, select

from eaip2sql.errors import AlreadyPopulatedError, PersistenceError
from eaip2sql.models import NavAid, NavAidKind, Intersection, RunMetadata
from eaip2sql.pipeline import EntityNormalizer, Orchestrator
from eaip2sql.storage import DatabaseStorage
from eaip2sql.storage.schema import (
    properties_table, navaid_table, intersection_table, airway_waypoint_table,
    airport_table, chart_table
)

from conftest import make_navaids, make_intersections, make_airways, make_airports


def count_rows(database_uri, table):
    engine = create_engine(database_uri)
    try:
        with engine.connect() as conn:
            return conn.execute(select(func.count()).select_from(table)).scalar()
    finally:
        engine.dispose()


def fetch_rows(database_uri, table, *order_by):
    engine = create_engine(database_uri)
    try:
        with engine.connect() as conn:
            return [dict(r._mapping) for r in conn.execute(select(table).order_by(*order_by))]
    finally:
        engine.dispose()


@pytest.fixture
def gb_data():
    return EntityNormalizer().normalize(
        'GB', make_navaids(), make_intersections(), make_airways(), make_airports()
    )


@pytest.fixture
def metadata(cycle):
    return RunMetadata.for_cycle(cycle)


class TestDatabaseStorage:

    def test_prepare_creates_schema(self, database_uri):
        with DatabaseStorage(database_uri) as storage:
            storage.prepare()
            storage.prepare()
        for table in [properties_table, navaid_table, intersection_table,
                      airway_waypoint_table, airport_table, chart_table]:
            assert count_rows(database_uri, table) == 0

    def test_save_metadata(self, database_uri, metadata):
        with DatabaseStorage(database_uri) as storage:
            storage.prepare()
            storage.save_metadata(metadata)
        properties = {r['id']: r['value'] for r in fetch_rows(database_uri, properties_table)}
        assert properties['generator'] == 'eaip2sql'
        assert properties['valid_from'] == '2026-10-01'
        assert properties['valid_until'] == '2026-10-29'
        assert properties['generated_at'] == metadata.generated_at

    def test_save_source(self, database_uri, metadata, gb_data):
        with DatabaseStorage(database_uri) as storage:
            storage.prepare()
            storage.save_metadata(metadata)
            storage.save_source(gb_data)

        assert count_rows(database_uri, navaid_table) == 3
        assert count_rows(database_uri, intersection_table) == 2
        assert count_rows(database_uri, airport_table) == 2

        waypoints = fetch_rows(database_uri, airway_waypoint_table, airway_waypoint_table.c.waypoint_id)
        assert [(w['waypoint_id'], w['navaid_id'], w['intersection_designator']) for w in waypoints] == [
            (1, 'BIG', None), (2, None, 'ABBOT'), (3, 'DET', None)
        ]
        assert waypoints[0]['upper_limit'] == 'FL245'

        charts = fetch_rows(database_uri, chart_table, chart_table.c.chart_id)
        assert [(c['airport_icao'], c['chart_id']) for c in charts] == [('EGKB', 1), ('EGKB', 2)]
        assert charts[1]['title'] == "Instrument Approach Chart - ILS RWY 21 'CAT I'"

    def test_ndb_frequency_stored_in_khz(self, database_uri, metadata, gb_data):
        with DatabaseStorage(database_uri) as storage:
            storage.prepare()
            storage.save_metadata(metadata)
            storage.save_source(gb_data)
        navaids = {r['id']: r for r in fetch_rows(database_uri, navaid_table)}
        assert navaids['LYX']['frequency'] == pytest.approx(397.0)
        assert navaids['LYX']['type'] == 'NDB'
        assert navaids['BIG']['frequency'] == pytest.approx(115.1)
        assert navaids['BIG']['type'] == 'VOR,DME'

    def test_second_run_refused(self, database_uri, cycle, registry):
        with DatabaseStorage(database_uri) as storage:
            Orchestrator(registry.list(), cycle, storage).run()
        navaids = count_rows(database_uri, navaid_table)

        with DatabaseStorage(database_uri) as storage:
            with pytest.raises(AlreadyPopulatedError) as exc_info:
                Orchestrator(registry.list(), cycle, storage).run()

        assert exc_info.value.identifier == 'generator'
        assert "already had navdata generated" in str(exc_info.value)
        assert count_rows(database_uri, navaid_table) == navaids
        assert count_rows(database_uri, properties_table) == 4

    def test_failing_source_rolled_back(self, database_uri, metadata, gb_data):
        # Second source publishes an intersection already written by the first
        fr_data = EntityNormalizer().normalize(
            'FR',
            [NavAid('AMB', 'AMBOISE', 113.7, 47.43, 1.06, NavAidKind.VORDME, 364)],
            [Intersection('ADEKA', 48.5, 1.5), Intersection('ABBOT', 52.0, 0.4)],
            [], []
        )
        with DatabaseStorage(database_uri) as storage:
            storage.prepare()
            storage.save_metadata(metadata)
            storage.save_source(gb_data)
            with pytest.raises(PersistenceError) as exc_info:
                storage.save_source(fr_data)

        assert exc_info.value.operation == 'intersection'
        assert exc_info.value.identifier == 'ABBOT'
        assert "Inserting intersection ABBOT failed" in str(exc_info.value)

        navaid_ids = [r['id'] for r in fetch_rows(database_uri, navaid_table, navaid_table.c.id)]
        assert navaid_ids == ['BIG', 'DET', 'LYX']
        assert count_rows(database_uri, intersection_table) == 2
        assert count_rows(database_uri, properties_table) == 4

    def test_invalid_uri(self):
        with pytest.raises(PersistenceError, match="connection"):
            DatabaseStorage('nosuchdriver://localhost/db')
