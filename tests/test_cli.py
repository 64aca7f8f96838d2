"""
Tests for the eaip2sql command line.
"""

import pytest
from sqlalchemy import create_engine, func, select

from eaip2sql.cli import build_parser, main
from eaip2sql.sources.cached import CachedSource
from eaip2sql.sources.registry import DEFAULT_REGISTRY, Source, SourceRegistry
from eaip2sql.storage import parse_script
from eaip2sql.storage.schema import navaid_table

from conftest import FakeProvider


def test_defaults(monkeypatch):
    monkeypatch.delenv('EAIP2SQL_DATABASE_URI', raising=False)
    args = build_parser().parse_args([])
    assert args.database_uri == 'sqlite:///navdata.db'
    assert args.exclude_ais == []
    assert not args.next_cycle


def test_repeated_excludes():
    args = build_parser().parse_args(['-x', 'GB', '--exclude-ais', 'FR'])
    assert args.exclude_ais == ['GB', 'FR']


def test_list_ais(registry, capsys):
    assert main(['--list-ais'], registry=registry) == 0
    out = capsys.readouterr().out
    assert 'Available AISs:' in out
    assert 'GB: United Kingdom' in out
    assert 'FR: France' in out


def test_list_ais_does_not_fetch(registry, provider, capsys):
    main(['-l'], registry=registry)
    assert provider.calls == []


def test_generate_database(registry, database_uri):
    assert main(['-d', database_uri], registry=registry) == 0

    engine = create_engine(database_uri)
    try:
        with engine.connect() as conn:
            assert conn.execute(select(func.count()).select_from(navaid_table)).scalar() == 4
    finally:
        engine.dispose()


def test_second_run_fails(registry, database_uri):
    assert main(['-d', database_uri], registry=registry) == 0
    assert main(['-d', database_uri], registry=registry) == 1


def test_exclude_source(registry, tmp_path, provider):
    script = tmp_path / 'navdata.sql'
    assert main(['-s', str(script), '-x', 'gb'], registry=registry) == 0
    rows = parse_script(script.read_text(encoding='utf-8'), table='navaid')
    assert [r['id'] for r in rows['navaid']] == ['AMB']
    assert provider.calls == []


def test_everything_excluded(registry, tmp_path):
    assert main(['-s', str(tmp_path / 'navdata.sql'), '-x', 'GB', '-x', 'FR'], registry=registry) == 1


def test_next_cycle(registry, tmp_path):
    script = tmp_path / 'navdata.sql'
    assert main(['-s', str(script)], registry=registry) == 0
    current = parse_script(script.read_text(encoding='utf-8'), table='properties')['properties']

    assert main(['-s', str(script), '-n'], registry=registry) == 0
    following = parse_script(script.read_text(encoding='utf-8'), table='properties')['properties']

    assert following[1]['value'] == current[2]['value']


def test_fetch_failure_exit_code(registry, provider, tmp_path):
    provider.fail_on = 'airways'
    assert main(['-s', str(tmp_path / 'navdata.sql')], registry=registry) == 1


def test_unusable_cache_dir_exit_code(tmp_path):
    cache_dir = tmp_path / 'cache'
    cache_dir.write_text('not a directory')
    args = ['-s', str(tmp_path / 'navdata.sql'), '-c', str(cache_dir)]
    assert main(args, registry=DEFAULT_REGISTRY) == 1


def test_conflicting_refresh_flags(registry):
    assert main(['--force-refresh', '--never-refresh'], registry=registry) == 1


@pytest.mark.parametrize('flag', ['--force-refresh', '--never-refresh'])
def test_refresh_flags_reach_providers(flag, tmp_path):
    class CachedFakeProvider(FakeProvider, CachedSource):
        def __init__(self):
            FakeProvider.__init__(self)
            CachedSource.__init__(self)

    created = []

    def factory(cycle, cache_dir):
        created.append(CachedFakeProvider())
        return created[-1]

    registry = SourceRegistry([Source('GB', 'United Kingdom', factory)])
    assert main(['-s', str(tmp_path / 'navdata.sql'), flag], registry=registry) == 0
    if flag == '--force-refresh':
        assert created[0]._force_refresh
    else:
        assert created[0]._never_refresh
