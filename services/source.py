from __future__ import annotations

import logging
import threading
import time
from typing import Callable, NamedTuple, Optional

from models.json_home import JsonHome
from services.generator import JsonHomeGenerator
from services.scanner import ResourceScanner

logger = logging.getLogger(__name__)


class _Published(NamedTuple):
    json_home: JsonHome
    generated_at: float


class JsonHomeSource:
    """
    Serves the current json-home document, regenerating it once it is older
    than `max_age` seconds (never, if `max_age` is None).

    A regenerated document is built completely before it replaces the
    published one, so readers always get a complete document. Concurrent
    regenerations are serialized; readers of a fresh document never wait.
    """

    def __init__(
            self,
            generator: JsonHomeGenerator,
            scanner: ResourceScanner,
            max_age: Optional[float] = 3600,
            clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.generator = generator
        self.scanner = scanner
        self.max_age = max_age
        self._clock = clock
        self._lock = threading.Lock()
        self._published: Optional[_Published] = None

    def get_json_home(self) -> JsonHome:
        published = self._published
        if published is not None and not self._is_stale(published):
            return published.json_home
        with self._lock:
            # another thread may have regenerated meanwhile
            published = self._published
            if published is None or self._is_stale(published):
                published = self._regenerate()
            return published.json_home

    def invalidate(self) -> None:
        """The next read regenerates the document."""
        self._published = None

    def _is_stale(self, published: _Published) -> bool:
        if self.max_age is None:
            return False
        return self._clock() - published.generated_at >= self.max_age

    def _regenerate(self) -> _Published:
        logger.info("Generating json-home document")
        json_home = self.generator.generate(self.scanner.scan())
        published = _Published(json_home, self._clock())
        self._published = published
        return published
