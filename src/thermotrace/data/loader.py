"""Fixture loading with NaN sanitization and a shared, load-once cache."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
import weakref
from pathlib import Path
from typing import Any

from thermotrace.data.contracts import Dataset


logger = logging.getLogger(__name__)

DATASET_ENV_VAR = "THERMOTRACE_DATASET"
DEFAULT_DATASET_PATH = Path("data/run-2025-10-01.json")

_NAN_LITERAL = re.compile(r":\s*NaN")


def resolve_dataset_path(path: str | Path | None = None) -> Path:
    """Explicit path, else ``$THERMOTRACE_DATASET``, else the bundled run fixture."""
    if path is not None:
        return Path(path)
    env_value = os.environ.get(DATASET_ENV_VAR)
    if env_value:
        return Path(env_value)
    return DEFAULT_DATASET_PATH


def sanitize_nan_literals(text: str) -> str:
    """Rewrite bare ``NaN`` values to ``null``; nothing else is touched."""
    return _NAN_LITERAL.sub(": null", text)


def read_dataset(path: str | Path) -> Dataset:
    """Read and parse one fixture file. Errors propagate."""
    raw = Path(path).read_text(encoding="utf-8")
    payload: Any = json.loads(sanitize_nan_literals(raw))
    if not isinstance(payload, dict):
        raise ValueError(f"dataset root must be a JSON object: {path}")
    return payload


class DatasetLoader:
    """Load one fixture at most once and hand every caller the same mapping.

    Concurrent awaiters on the same event loop serialize on a per-loop lock,
    so only the first performs the read. A failed load is logged and yields an
    empty dataset that is not cached; the next call tries again.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._dataset: Dataset | None = None
        self._locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock] = (
            weakref.WeakKeyDictionary()
        )
        self._read_count = 0

    @property
    def path(self) -> Path:
        return self._path

    @property
    def loaded(self) -> bool:
        return self._dataset is not None

    @property
    def read_count(self) -> int:
        """Number of file reads attempted so far."""
        return self._read_count

    async def load(self) -> Dataset:
        if self._dataset is not None:
            return self._dataset

        async with self._loop_lock():
            if self._dataset is not None:
                return self._dataset
            self._read_count += 1
            try:
                dataset = await asyncio.to_thread(read_dataset, self._path)
            except (OSError, ValueError) as exc:
                logger.error("Failed to load run data from %s: %s", self._path, exc, exc_info=True)
                return {}
            logger.info("Loaded %d timestep records from %s", len(dataset), self._path)
            self._dataset = dataset
            return dataset

    def _loop_lock(self) -> asyncio.Lock:
        # asyncio locks bind to the first loop that waits on them.
        loop = asyncio.get_running_loop()
        lock = self._locks.get(loop)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[loop] = lock
        return lock

    def reset(self) -> None:
        """Drop the cached dataset so the next ``load`` rereads the file."""
        self._dataset = None


_LOADERS: dict[Path, DatasetLoader] = {}


def get_loader(path: str | Path | None = None) -> DatasetLoader:
    """Process-wide loader for the resolved fixture path."""
    resolved = resolve_dataset_path(path).resolve()
    loader = _LOADERS.get(resolved)
    if loader is None:
        loader = DatasetLoader(resolved)
        _LOADERS[resolved] = loader
    return loader


async def load_dataset(path: str | Path | None = None) -> Dataset:
    """Await the shared, memoized fixture for ``path``."""
    return await get_loader(path).load()


def clear_loader_cache() -> None:
    _LOADERS.clear()
