"""
In-process cache of rendered views keyed by path.

Actions call `invalidate(path)` after a successful mutation; the next read of
that path recomputes the view.
"""

import threading
from typing import Any, Dict, Optional

from invoicing.utils.logging import get_logger

logger = get_logger(__name__)

INVOICES_PATH = "/dashboard/invoices"


class ViewCache:
    def __init__(self) -> None:
        self._views: Dict[str, Any] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Optional[Any]:
        with self._lock:
            return self._views.get(path)

    def set(self, path: str, value: Any) -> None:
        with self._lock:
            self._views[path] = value

    def invalidate(self, path: str) -> None:
        """Mark the view at `path` as stale. Unknown paths are ignored."""
        with self._lock:
            self._views.pop(path, None)
        logger.debug(f"View invalidated: {path}")

    def clear(self) -> None:
        with self._lock:
            self._views.clear()

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._views
