"""Client-side persistence for todoq.

LocalStorage is a file-backed string key/value store with the same shape as
browser localStorage; the task list lives in one slot of it.
"""

from __future__ import annotations

from todoq.storage.local import LocalStorage

__all__ = ["LocalStorage"]
