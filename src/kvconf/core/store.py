from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from kvconf.core.errors import SourceUnavailableError
from kvconf.core.models import StoreSettings
from kvconf.parsers.types import ParsedKV
from kvconf.parsers.yaml_parser import parse_yaml, parse_yaml_file

logger = logging.getLogger(__name__)


class ConfigStore:
    """
    Flat key/value view of a YAML configuration file.

    Every key is stored under the namespace prefix, e.g. the YAML

      net:
        eth0:
          ip: 10.0.0.1

    is stored as `config:net:eth0:ip`; callers address it as `net:eth0:ip`.
    Values are kept as strings.
    """

    def __init__(self, settings: Optional[StoreSettings] = None) -> None:
        self.settings = settings or StoreSettings()
        self._data: Dict[str, str] = {}
        self._lock = threading.RLock()

    # ----------------------------
    # Key helpers
    # ----------------------------

    @property
    def prefix(self) -> str:
        return f"{self.settings.namespace}{self.settings.separator}"

    def _qualify(self, name: str) -> str:
        # built per call; the store keeps no shared key buffer
        return f"{self.prefix}{name}"

    # ----------------------------
    # Loading
    # ----------------------------

    def _replace(self, entries: Iterable[ParsedKV]) -> int:
        fresh: Dict[str, str] = {}
        for kv in entries:
            fresh.setdefault(self._qualify(kv.key), kv.value)
        with self._lock:
            self._data = fresh
        return len(fresh)

    def load(self, path: Union[str, Path]) -> bool:
        """
        Load a YAML file, replacing the current contents.

        Returns False when the file cannot be opened; the previous contents
        are kept. In strict mode the error is raised instead.
        """
        try:
            entries = parse_yaml_file(
                path,
                separator=self.settings.separator,
                strict=self.settings.strict,
            )
        except SourceUnavailableError as e:
            if self.settings.strict:
                raise
            logger.warning("%s", e)
            return False

        count = self._replace(entries)
        logger.info("Loaded %d entries from %s", count, path)
        return True

    def load_text(self, text: str) -> None:
        entries = parse_yaml(
            text,
            separator=self.settings.separator,
            strict=self.settings.strict,
        )
        self._replace(entries)

    def clear(self) -> None:
        with self._lock:
            self._data = {}

    # ----------------------------
    # Accessors
    # ----------------------------

    def merge(self, name: str, value: str) -> None:
        """Set `name` only if it is not set yet (first write wins)."""
        key = self._qualify(name)
        with self._lock:
            if key not in self._data:
                self._data[key] = value

    def get(self, name: str) -> Optional[str]:
        key = self._qualify(name)
        with self._lock:
            return self._data.get(key)

    def get_collection(self, name: str) -> Dict[str, str]:
        """
        All entries below `name`, keyed by the rest of their path.

        get_collection("net:eth0") on
          net:eth0:ip, net:eth0:mask, net:eth1:ip
        returns {"ip": ..., "mask": ...}.
        """
        head = self._qualify(name) + self.settings.separator
        with self._lock:
            return {
                k[len(head):]: v
                for k, v in self._data.items()
                if k.startswith(head) and len(k) > len(head)
            }

    def require(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    # ----------------------------
    # Views
    # ----------------------------

    def keys(self) -> List[str]:
        """Unqualified keys, sorted."""
        n = len(self.prefix)
        with self._lock:
            return sorted(k[n:] for k in self._data)

    def items(self) -> List[Tuple[str, str]]:
        n = len(self.prefix)
        with self._lock:
            return sorted((k[n:], v) for k, v in self._data.items())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.get(name) is not None

    def __repr__(self) -> str:
        return f"ConfigStore(namespace={self.settings.namespace!r}, entries={len(self)})"
