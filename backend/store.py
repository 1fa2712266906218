# file: backend/store.py

import json
import logging
import os
import threading
from typing import Any, Callable, Dict


class KeyValueStore:
    """Namespaced key-value store holding JSON values. Writes replace the whole value."""

    def __init__(self, namespace: str = "airguard"):
        self.namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self.namespace}_{key}"

    def get(self, key: str, default: Any = None) -> Any:
        raise NotImplementedError

    def set(self, key: str, value: Any) -> None:
        raise NotImplementedError

    def update(self, key: str, fn: Callable[[Any], Any], default: Any = None) -> Any:
        """Replace the value with fn(current) as one step; no other write lands in between."""
        raise NotImplementedError

    def clear(self, key: str) -> None:
        raise NotImplementedError


class MemoryStore(KeyValueStore):
    def __init__(self, namespace: str = "airguard"):
        super().__init__(namespace)
        self._data: Dict[str, str] = {}
        self._lock = threading.Lock()

    def _read(self, key: str, default: Any) -> Any:
        raw = self._data.get(self._key(key))
        if raw is None:
            return default
        return json.loads(raw)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._read(key, default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[self._key(key)] = json.dumps(value)

    def update(self, key: str, fn: Callable[[Any], Any], default: Any = None) -> Any:
        with self._lock:
            value = fn(self._read(key, default))
            self._data[self._key(key)] = json.dumps(value)
            return value

    def clear(self, key: str) -> None:
        with self._lock:
            self._data.pop(self._key(key), None)


class JsonFileStore(KeyValueStore):
    """Store persisted as a single JSON object on disk."""

    def __init__(self, path: str, namespace: str = "airguard"):
        super().__init__(namespace)
        self.path = path
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return data if isinstance(data, dict) else {}
        except (OSError, ValueError) as e:
            logging.warning(f"Ignoring unreadable store file {self.path}: {e}")
            return {}

    def _save(self, data: Dict[str, Any]) -> None:
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return self._load().get(self._key(key), default)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            data = self._load()
            data[self._key(key)] = value
            self._save(data)

    def update(self, key: str, fn: Callable[[Any], Any], default: Any = None) -> Any:
        with self._lock:
            data = self._load()
            value = fn(data.get(self._key(key), default))
            data[self._key(key)] = value
            self._save(data)
            return value

    def clear(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(self._key(key), None) is not None:
                self._save(data)
