"""
Unit tests for the key-value stores.
"""
import pytest
import sys
import os
import yaml

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from core.storage import MemoryStore, YamlStore


@pytest.fixture(params=['memory', 'yaml'])
def any_store(request, tmp_path):
    if request.param == 'memory':
        return MemoryStore()
    return YamlStore(str(tmp_path / "session"))


class TestStores:
    """Behaviour shared by every store."""

    def test_missing_key_is_none(self, any_store):
        assert any_store.get('players') is None

    def test_set_and_get(self, any_store):
        any_store.set('players', [{'id': 'P1', 'name': 'Ann'}])
        assert any_store.get('players') == [{'id': 'P1', 'name': 'Ann'}]

    def test_overwrite(self, any_store):
        any_store.set('currentRound', 0)
        any_store.set('currentRound', 3)
        assert any_store.get('currentRound') == 3

    def test_remove_is_idempotent(self, any_store):
        any_store.set('champion', {'name': 'Team 1'})
        any_store.remove('champion')
        any_store.remove('champion')
        assert any_store.get('champion') is None

    def test_keys(self, any_store):
        any_store.set('players', [])
        any_store.set('rounds', [])
        assert sorted(any_store.keys()) == ['players', 'rounds']

    def test_values_are_copies(self, any_store):
        value = {'matches': [{'score1': None}]}
        any_store.set('rounds', value)
        value['matches'][0]['score1'] = 11
        assert any_store.get('rounds')['matches'][0]['score1'] is None


class TestYamlStore:
    """YAML file specifics."""

    def test_one_file_per_key(self, tmp_path):
        store = YamlStore(str(tmp_path))
        store.set('players', ['P1'])
        path = tmp_path / "players.yaml"
        assert path.exists()
        assert yaml.safe_load(path.read_text()) == ['P1']

    def test_keys_on_missing_dir(self, tmp_path):
        assert YamlStore(str(tmp_path / "nope")).keys() == []
