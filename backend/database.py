# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Record store: the chirp and user tables, their locks, and their JSON files.

One ``Database`` is built at startup by ``main.create_app`` and shared by all
request threads through ``app.state.db``; handlers receive it with
``Depends(get_db)``.

Locking
-------
Each table has its own :class:`RWLock`.  Reads share it; every mutation holds
the write lock for the whole change *including* the snapshot write, so the
file on disk always matches the last completed mutation.

Persistence failures
--------------------
If the snapshot write fails the in-memory change is kept and
:class:`PersistenceError` is raised.  Callers may retry the write with
``persist_chirps`` / ``persist_users``.
"""

import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, Generic, List, Optional, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from core.codec import CHIRP_CODEC, USER_CODEC, TableCodec
from core.errors import (
    ConflictError,
    FormatError,
    InvalidRecordError,
    NotFoundError,
    PersistenceError,
)
from core.logger import logger
from core.policy import ensure_owner
from core.rwlock import RWLock
from models.chirp import Chirp
from models.user import User

RecordT = TypeVar("RecordT", bound=BaseModel)

# Mode of the table files; mkstemp would otherwise leave them 0600
_FILE_MODE = 0o644


def _build(model, **fields):
    """Construct a record, turning schema failures into InvalidRecordError."""
    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        raise InvalidRecordError(f"invalid {model.__name__.lower()}: {exc}") from exc


class _Table(Generic[RecordT]):
    """One lock-guarded table and the file it is mirrored to."""

    def __init__(self, name: str, path: Path, codec: TableCodec) -> None:
        self.name = name
        self.path = Path(path)
        self.codec = codec
        self.lock = RWLock()
        self.rows: Dict[int, RecordT] = {}
        # Highest id ever handed out.  Never decremented, so deleted ids are
        # not reused for the lifetime of the process.
        self.last_id = 0

    def load(self) -> None:
        with self.lock.write():
            try:
                data = self.path.read_bytes()
            except FileNotFoundError:
                logger.info("%s: %s not found, creating empty table", self.name, self.path)
                self.rows = {}
                self.last_id = 0
                self.save()
                return
            except OSError as exc:
                raise PersistenceError(f"cannot read {self.path}: {exc}") from exc

            # A zero-length file is an empty table, not corruption
            rows = self.codec.decode(data) if data.strip() else {}
            self.rows = rows
            self.last_id = max(rows, default=0)
            logger.info("%s: loaded %d record(s) from %s", self.name, len(rows), self.path)

    def save(self) -> None:
        """
        Write the full table atomically.  Caller must hold the write lock.

        The snapshot goes to a temp file in the same directory and is then
        renamed over the old file, so a reader of the file never sees a
        half-written snapshot.
        """
        data = self.codec.encode(self.rows)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.chmod(tmp_name, _FILE_MODE)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            logger.error("%s: failed to write %s: %s", self.name, self.path, exc)
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            raise PersistenceError(f"cannot write {self.path}: {exc}") from exc


class Database:
    """
    The chirp and user tables.

    *password_hasher* turns a plaintext password into the stored hash; it is
    called outside any lock since it is deliberately slow.
    """

    def __init__(
        self,
        chirps_path: Path,
        users_path: Path,
        password_hasher: Callable[[str], str],
        enforce_ownership: bool = True,
    ) -> None:
        self._chirps: _Table[Chirp] = _Table("chirps", chirps_path, CHIRP_CODEC)
        self._users: _Table[User] = _Table("users", users_path, USER_CODEC)
        self._hash_password = password_hasher
        self.enforce_ownership = enforce_ownership

    def load(self) -> None:
        """
        Load both tables from disk.  A FormatError means the file cannot be
        trusted; it is logged and re-raised so startup aborts.
        """
        for table in (self._chirps, self._users):
            try:
                table.load()
            except FormatError as exc:
                logger.critical("%s: corrupt data in %s: %s", table.name, table.path, exc)
                raise

    # -- Chirps ---------------------------------------------------------------

    def create_chirp(self, body: str, author: Optional[int] = None) -> Chirp:
        table = self._chirps
        with table.lock.write():
            chirp = _build(Chirp, id=table.last_id + 1, body=body, author=author)
            table.last_id = chirp.id
            table.rows[chirp.id] = chirp
            table.save()
        logger.info("chirp %d created by author=%s", chirp.id, author)
        return chirp

    def get_chirp(self, chirp_id: int) -> Chirp:
        with self._chirps.lock.read():
            chirp = self._chirps.rows.get(chirp_id)
        if chirp is None:
            raise NotFoundError(f"Chirp {chirp_id} does not exist")
        return chirp

    def list_chirps(self, author: Optional[int] = None) -> List[Chirp]:
        """All chirps in insertion order, optionally only those by *author*."""
        with self._chirps.lock.read():
            chirps = list(self._chirps.rows.values())
        if author is not None:
            chirps = [c for c in chirps if c.author == author]
        return chirps

    def update_chirp(self, chirp_id: int, body: str, requester_id: Optional[int] = None) -> Chirp:
        """
        Replace the body of a chirp.  With *requester_id* given and ownership
        enforced, only the author may do this.
        """
        table = self._chirps
        with table.lock.write():
            current = table.rows.get(chirp_id)
            if current is None:
                raise NotFoundError(f"Chirp {chirp_id} does not exist")
            if requester_id is not None and self.enforce_ownership:
                ensure_owner(requester_id, current.author)
            chirp = _build(Chirp, id=chirp_id, body=body, author=current.author)
            table.rows[chirp_id] = chirp
            table.save()
        logger.info("chirp %d updated", chirp_id)
        return chirp

    def delete_chirp(self, chirp_id: int, requester_id: Optional[int]) -> None:
        table = self._chirps
        with table.lock.write():
            current = table.rows.get(chirp_id)
            if current is None:
                raise NotFoundError(f"Chirp {chirp_id} does not exist")
            if self.enforce_ownership:
                ensure_owner(requester_id, current.author)
            del table.rows[chirp_id]
            table.save()
        logger.info("chirp %d deleted by user_id=%s", chirp_id, requester_id)

    def persist_chirps(self) -> None:
        with self._chirps.lock.write():
            self._chirps.save()

    # -- Users ----------------------------------------------------------------

    def create_user(self, email: str, password: str, name: str = "") -> User:
        """Hash *password*, then insert the user unless *email* is taken."""
        password_hash = self._hash_password(password)
        table = self._users
        with table.lock.write():
            if any(u.email == email for u in table.rows.values()):
                raise ConflictError(f"User with email {email} already exists")
            user = _build(
                User,
                id=table.last_id + 1,
                name=name,
                email=email,
                password_hash=password_hash,
            )
            table.last_id = user.id
            table.rows[user.id] = user
            table.save()
        logger.info("user %d registered", user.id)
        return user

    def get_user_by_email(self, email: str) -> User:
        with self._users.lock.read():
            user = next((u for u in self._users.rows.values() if u.email == email), None)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def get_user_by_id(self, user_id: int) -> User:
        with self._users.lock.read():
            user = self._users.rows.get(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} does not exist")
        return user

    def list_users(self) -> List[User]:
        with self._users.lock.read():
            return list(self._users.rows.values())

    def update_user(self, user: User) -> User:
        """Whole-record replace, keyed on ``user.id``."""
        table = self._users
        with table.lock.write():
            if user.id not in table.rows:
                raise NotFoundError(f"User {user.id} does not exist")
            if any(u.email == user.email and u.id != user.id for u in table.rows.values()):
                raise ConflictError(f"User with email {user.email} already exists")
            table.rows[user.id] = user
            table.save()
        logger.info("user %d updated", user.id)
        return user

    def patch_user(self, user_id: int, **changes) -> User:
        """
        Read-modify-write of selected fields under one write lock, so a
        concurrent premium flip and a profile edit cannot overwrite each other.
        """
        table = self._users
        with table.lock.write():
            current = table.rows.get(user_id)
            if current is None:
                raise NotFoundError(f"User {user_id} does not exist")
            user = _build(User, **{**current.model_dump(), **changes})
            if any(u.email == user.email and u.id != user_id for u in table.rows.values()):
                raise ConflictError(f"User with email {user.email} already exists")
            table.rows[user_id] = user
            table.save()
        logger.info("user %d updated (%s)", user_id, ", ".join(sorted(changes)))
        return user

    def persist_users(self) -> None:
        with self._users.lock.write():
            self._users.save()


def get_db(request: Request) -> Database:
    """
    FastAPI dependency.  Returns the process-wide Database built by
    ``create_app``.  Use with Depends(get_db).
    """
    return request.app.state.db
