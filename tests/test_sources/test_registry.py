import pytest

from eaip2sql.sources import DEFAULT_REGISTRY, MakeAIPWebSource
from eaip2sql.sources.registry import Source, SourceRegistry


class TestSourceRegistry:

    def test_list_preserves_order(self, registry):
        assert [s.country for s in registry.list()] == ['GB', 'FR']
        assert len(registry) == 2

    def test_filter_excludes(self, registry):
        assert [s.country for s in registry.filter(['FR'])] == ['GB']

    def test_filter_nothing_excluded(self, registry):
        assert [s.country for s in registry.filter()] == ['GB', 'FR']

    def test_filter_is_case_insensitive(self, registry):
        assert [s.country for s in registry.filter(['fr'])] == ['GB']

    def test_filter_unknown_code_is_ignored(self, registry, caplog):
        assert [s.country for s in registry.filter(['DE'])] == ['GB', 'FR']
        assert 'DE' in caplog.text

    def test_filter_everything(self, registry):
        assert registry.filter(['GB', 'FR']) == []

    def test_get(self, registry):
        assert registry.get('gb').name == 'United Kingdom'
        with pytest.raises(KeyError):
            registry.get('DE')

    def test_duplicate_country_rejected(self):
        with pytest.raises(ValueError, match="Duplicate country codes"):
            SourceRegistry([
                Source('GB', 'One', lambda cycle, cache_dir: None),
                Source('GB', 'Two', lambda cycle, cache_dir: None),
            ])


class TestDefaultRegistry:

    def test_default_sources(self):
        assert [s.country for s in DEFAULT_REGISTRY] == ['GB', 'NO']

    def test_creates_makeaip_provider(self, cycle, tmp_path):
        provider = DEFAULT_REGISTRY.get('GB').create_provider(cycle, str(tmp_path))
        assert isinstance(provider, MakeAIPWebSource)
        assert provider.country_prefix == 'EG'
        assert provider.airac_date == '2026-10-01'
        assert provider.cache_path == tmp_path / 'eg_eaip_web'

    def test_sources_use_separate_caches(self, cycle, tmp_path):
        gb = DEFAULT_REGISTRY.get('GB').create_provider(cycle, str(tmp_path))
        no = DEFAULT_REGISTRY.get('NO').create_provider(cycle, str(tmp_path))
        assert gb.cache_path != no.cache_path
