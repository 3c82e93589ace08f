"""
Key-value stores backing a tournament session.
"""
import os
import copy

import yaml


class MemoryStore:
    """Dict-backed store. Values are deep-copied in and out like a real store."""

    def __init__(self, data=None):
        self._data = copy.deepcopy(data) if data else {}

    def get(self, key):
        value = self._data.get(key)
        return copy.deepcopy(value)

    def set(self, key, value):
        self._data[key] = copy.deepcopy(value)

    def remove(self, key):
        self._data.pop(key, None)

    def keys(self):
        return list(self._data)


class YamlStore:
    """One YAML file per key inside a data directory."""

    def __init__(self, data_dir):
        self.data_dir = data_dir

    def _path(self, key):
        return os.path.join(self.data_dir, f'{key}.yaml')

    def get(self, key):
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)

    def set(self, key, value):
        os.makedirs(self.data_dir, exist_ok=True)
        with open(self._path(key), 'w', encoding='utf-8') as f:
            yaml.safe_dump(value, f, default_flow_style=False, sort_keys=False)

    def remove(self, key):
        path = self._path(key)
        if os.path.exists(path):
            os.remove(path)

    def keys(self):
        if not os.path.isdir(self.data_dir):
            return []
        return [name[:-len('.yaml')] for name in sorted(os.listdir(self.data_dir))
                if name.endswith('.yaml')]
