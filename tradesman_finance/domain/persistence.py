"""Session persistence port - latest inputs and results per calculator"""

import json
import logging
from typing import Any, Callable, Dict, Optional, Protocol

from tradesman_finance.utils.serialization import to_plain

logger = logging.getLogger(__name__)


class SessionStore(Protocol):
    """Key-value storage scoped to one browsing session"""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def clear(self) -> None: ...


class InMemorySessionStore:
    """Dictionary-backed store, one instance per session"""

    def __init__(self) -> None:
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def clear(self) -> None:
        self._data.clear()


class CalculatorPersistence:
    """
    Save and load {inputs, results} pairs by calculator storage key.

    A later save fully replaces the earlier one. Stored data that cannot be
    decoded into that shape is reported through `on_corrupt` and treated as
    absent; load never raises for bad data.
    """

    def __init__(self, store: SessionStore, on_corrupt: Callable[[str], None] | None = None):
        self.store = store
        self.on_corrupt = on_corrupt

    def save(self, storage_key: str, inputs: Any, results: Any) -> None:
        payload = {"inputs": to_plain(inputs), "results": to_plain(results)}
        self.store.set(storage_key, json.dumps(payload))

    def load(self, storage_key: str) -> Optional[Dict[str, Any]]:
        raw = self.store.get(storage_key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as e:
            self._corrupt(storage_key, f"undecodable payload: {e}")
            return None

        if not isinstance(data, dict) or not {"inputs", "results"} <= data.keys():
            self._corrupt(storage_key, "missing inputs/results")
            return None

        if not isinstance(data["inputs"], dict) or not isinstance(data["results"], dict):
            self._corrupt(storage_key, "inputs/results are not objects")
            return None

        return {"inputs": data["inputs"], "results": data["results"]}

    def clear(self) -> None:
        self.store.clear()

    def _corrupt(self, storage_key: str, reason: str) -> None:
        logger.warning("Discarding stored calculation", extra={"storage_key": storage_key, "reason": reason})
        if self.on_corrupt is not None:
            self.on_corrupt(storage_key)
