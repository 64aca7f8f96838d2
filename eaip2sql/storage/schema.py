#!/usr/bin/env python3

"""
Table definitions shared by every storage backend.

Tables are listed in dependency order: navaids and intersections before
the airway waypoints referencing them, airports before their charts.
"""

from dataclasses import asdict
from typing import Any, Dict

from sqlalchemy import (
    Column, Double, Integer, MetaData, PrimaryKeyConstraint, String, Table, Text
)

metadata = MetaData()

properties_table = Table(
    'properties', metadata,
    Column('id', String(64), primary_key=True),
    Column('value', String(255), nullable=False),
)

navaid_table = Table(
    'navaid', metadata,
    Column('id', String(8), primary_key=True),
    Column('name', String(255), nullable=False),
    Column('frequency', Double, nullable=False),  # kHz for NDB, MHz otherwise
    Column('latitude', Double, nullable=False),
    Column('longitude', Double, nullable=False),
    Column('elevation', Integer),
    Column('type', String(16), nullable=False),
)

intersection_table = Table(
    'intersection', metadata,
    Column('designator', String(8), primary_key=True),
    Column('latitude', Double, nullable=False),
    Column('longitude', Double, nullable=False),
)

airway_waypoint_table = Table(
    'airway_waypoint', metadata,
    Column('airway_designator', String(16), nullable=False),
    Column('waypoint_id', Integer, nullable=False, autoincrement=False),
    Column('upper_limit', String(32)),
    Column('lower_limit', String(32)),
    Column('navaid_id', String(8)),
    Column('intersection_designator', String(8)),
    PrimaryKeyConstraint('airway_designator', 'waypoint_id'),
)

airport_table = Table(
    'airport', metadata,
    Column('icao', String(4), primary_key=True),
    Column('name', String(255)),
    Column('latitude', Double),
    Column('longitude', Double),
    Column('elevation', Integer),
)

chart_table = Table(
    'chart', metadata,
    Column('airport_icao', String(4), nullable=False),
    Column('chart_id', Integer, nullable=False, autoincrement=False),
    Column('title', Text, nullable=False),
    Column('url', Text, nullable=False),
    PrimaryKeyConstraint('airport_icao', 'chart_id'),
)

# Creation order
TABLES = [
    properties_table,
    navaid_table,
    intersection_table,
    airway_waypoint_table,
    airport_table,
    chart_table,
]


def record_values(record) -> Dict[str, Any]:
    """Column values of a normalized record."""
    return asdict(record)
