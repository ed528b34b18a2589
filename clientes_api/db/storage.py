from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List
import json
import logging
import os
import tempfile
import threading

from clientes_api.core.config import settings
from clientes_api.core.exceptions import StorageError, StorageParseError

logger = logging.getLogger(__name__)

# One lock per backing file, shared by every repository pointing at it.
_FILE_LOCKS: Dict[Path, threading.RLock] = {}
_REGISTRY_LOCK = threading.Lock()


def _reject_constant(name: str):
    raise StorageParseError(f"Non-standard JSON constant {name}")


def _lock_for(path: Path) -> threading.RLock:
    with _REGISTRY_LOCK:
        lock = _FILE_LOCKS.get(path)
        if lock is None:
            lock = threading.RLock()
            _FILE_LOCKS[path] = lock
        return lock


class ClienteRepository(ABC):
    @abstractmethod
    def load(self) -> List[Any]:
        pass

    @abstractmethod
    def save(self, clientes: List[Any]):
        pass

    @abstractmethod
    def transaction(self):
        pass


class JsonFileClienteRepository(ClienteRepository):
    """
    Stores the whole collection as one JSON array in a single file.

    Every read loads the full file and every write replaces it. Access to
    a given file is serialized through a process-wide re-entrant lock, so
    a load-modify-save cycle run inside ``transaction()`` cannot interleave
    with another one on the same file.
    """

    def __init__(self, path):
        self.path = Path(path).resolve()
        self._lock = _lock_for(self.path)

    def load(self) -> List[Any]:
        with self._lock:
            try:
                data = self.path.read_text(encoding="utf-8")
            except OSError as e:
                raise StorageError(f"Cannot read {self.path}: {e}") from e

            try:
                clientes = json.loads(data, parse_constant=_reject_constant)
            except json.JSONDecodeError as e:
                raise StorageParseError(f"Invalid JSON in {self.path}: {e}") from e

            if not isinstance(clientes, list):
                raise StorageParseError(
                    f"Expected a JSON array in {self.path}, got {type(clientes).__name__}"
                )
            return clientes

    def save(self, clientes: List[Any]):
        try:
            content = json.dumps(clientes, indent=2, ensure_ascii=False, allow_nan=False)
        except ValueError as e:
            raise StorageError(f"Cannot serialize clientes for {self.path}: {e}") from e
        with self._lock:
            tmp_name = None
            try:
                with tempfile.NamedTemporaryFile(
                    "w",
                    encoding="utf-8",
                    dir=self.path.parent,
                    prefix=f".{self.path.name}.",
                    suffix=".tmp",
                    delete=False,
                ) as tmp:
                    tmp_name = tmp.name
                    tmp.write(content)
                    tmp.flush()
                    os.fsync(tmp.fileno())
                os.replace(tmp_name, self.path)
            except OSError as e:
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise StorageError(f"Cannot write {self.path}: {e}") from e

        logger.debug(f"Saved {len(clientes)} clientes to {self.path}")

    @contextmanager
    def transaction(self) -> Iterator[List[Any]]:
        # Changes are only written back when the block exits cleanly.
        with self._lock:
            clientes = self.load()
            yield clientes
            self.save(clientes)


def get_repository() -> ClienteRepository:
    return JsonFileClienteRepository(settings.DATA_FILE)
