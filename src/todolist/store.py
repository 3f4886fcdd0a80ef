from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from threading import RLock
from typing import Iterator, List, Optional, Union
from uuid import UUID

from .archive import ArchiveError, ArchiveFormat, decode_todos, encode_todos
from .models import ToDo, sample_todos

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class ToDoStore:
    """
    Owner of the ordered to-do collection and of its archive file.

    Insertion order is display order. Every operation runs under one lock, so
    a read-modify-write cycle (mutation followed by the autosave) is never
    interleaved with another one. Persistence always rewrites the whole file.
    """

    def __init__(
        self,
        path: Union[str, Path],
        archive_format: ArchiveFormat = ArchiveFormat.BINARY,
        autosave: bool = True,
    ) -> None:
        self._lock = RLock()
        self._todos: List[ToDo] = []
        self.path = Path(path)
        self.archive_format = archive_format
        self.autosave = autosave

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        archive_format: ArchiveFormat = ArchiveFormat.BINARY,
        autosave: bool = True,
    ) -> "ToDoStore":
        """Construct a store and load its archive (or the samples)."""
        store = cls(path, archive_format=archive_format, autosave=autosave)
        store.load()
        return store

    # Reading

    @property
    def all_todos(self) -> List[ToDo]:
        """The to-dos in display order, as a new list."""
        with self._lock:
            return list(self._todos)

    def get(self, todo_id: UUID) -> Optional[ToDo]:
        with self._lock:
            for todo in self._todos:
                if todo.id == todo_id:
                    return todo
            return None

    def index_of(self, todo: ToDo) -> Optional[int]:
        with self._lock:
            try:
                return self._todos.index(todo)
            except ValueError:
                return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    def __iter__(self) -> Iterator[ToDo]:
        return iter(self.all_todos)

    def __contains__(self, todo: object) -> bool:
        with self._lock:
            return todo in self._todos

    # Mutation

    def add_new(self, todo: ToDo) -> None:
        """Append a to-do. Duplicate ids are not checked."""
        with self._lock:
            self._todos.append(todo)
            logger.debug("Added to-do %s", todo.id)
            self._autosave()

    def remove(self, todo: ToDo) -> bool:
        """
        Remove the first to-do with the same id as `todo`.

        Returns:
            True if a to-do was removed, False if none matched (nothing changes).
        """
        with self._lock:
            index = self.index_of(todo)
            if index is None:
                return False
            del self._todos[index]
            logger.debug("Removed to-do %s", todo.id)
            self._autosave()
            return True

    def replace_or_append(self, todo: ToDo) -> bool:
        """
        Store an edited or a new to-do.

        A to-do whose id is already present overwrites it at the same position;
        any other to-do is appended.

        Returns:
            True if an existing to-do was replaced, False if `todo` was appended.
        """
        with self._lock:
            index = self.index_of(todo)
            if index is None:
                self._todos.append(todo)
                replaced = False
            else:
                self._todos[index] = todo
                replaced = True
            logger.debug("%s to-do %s", "Replaced" if replaced else "Appended", todo.id)
            self._autosave()
            return replaced

    # Persistence

    def load(self) -> bool:
        """
        Replace the collection with the archive contents.

        A missing, unreadable or undecodable archive leaves the store holding the
        built-in samples instead. Nothing is raised in that case.

        Returns:
            True if the to-dos came from the archive, False if the samples were used.
        """
        with self._lock:
            try:
                data = self.path.read_bytes()
                todos = decode_todos(data, self.archive_format)
            except FileNotFoundError:
                logger.info("No saved to-dos at %s; starting with sample to-dos", self.path)
            except (OSError, ArchiveError) as e:
                logger.warning("Could not load to-dos from %s (%s); starting with sample to-dos", self.path, e)
            else:
                self._todos = todos
                logger.debug("Loaded %d to-dos from %s", len(todos), self.path)
                return True

            self._todos = sample_todos()
            return False

    def save(self) -> bool:
        """
        Write the whole collection to the archive file.

        The data goes to a temporary file next to the archive which then replaces
        it, so the previous archive survives any failure untouched.

        Returns:
            True on success, False if the write failed (the failure is logged).
        """
        with self._lock:
            tmp_path: Optional[str] = None
            try:
                data = encode_todos(self._todos, self.archive_format)
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
                with os.fdopen(fd, "wb") as f:
                    f.write(data)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
                tmp_path = None
            except (OSError, ArchiveError) as e:
                logger.warning("Could not save to-dos to %s: %s", self.path, e)
                return False
            finally:
                if tmp_path is not None:
                    try:
                        os.remove(tmp_path)
                    except OSError:
                        pass
            logger.debug("Saved %d to-dos to %s", len(self._todos), self.path)
            return True

    def _autosave(self) -> None:
        if self.autosave:
            self.save()
