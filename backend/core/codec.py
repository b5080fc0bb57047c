# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Persistence codec – turns a table (``dict[int, Record]``) into JSON bytes and
back.

On-disk layout is one JSON object per table mapping the decimal string id to
the record, field names verbatim::

    {"1": {"id": 1, "body": "hello", "author": 3}}

``decode(encode(t)) == t`` for every well-formed table, the empty one
included.  Anything else raises :class:`FormatError`.
"""

from typing import Dict, Generic, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from core.errors import FormatError
from models.chirp import Chirp
from models.user import User

RecordT = TypeVar("RecordT", bound=BaseModel)


class TableCodec(Generic[RecordT]):
    def __init__(self, model: Type[RecordT]) -> None:
        self.model = model
        self._adapter = TypeAdapter(Dict[str, model])

    def encode(self, table: Dict[int, RecordT]) -> bytes:
        return self._adapter.dump_json({str(key): record for key, record in table.items()})

    def decode(self, data: bytes) -> Dict[int, RecordT]:
        try:
            raw = self._adapter.validate_json(data)
        except ValidationError as exc:
            raise FormatError(f"invalid {self.model.__name__} table: {exc}") from exc

        table: Dict[int, RecordT] = {}
        for key, record in raw.items():
            # Rejects "01", " 1" and keys that disagree with the record id
            if key != str(record.id):
                raise FormatError(
                    f"{self.model.__name__} key {key!r} does not match record id {record.id}"
                )
            table[record.id] = record
        return table


CHIRP_CODEC = TableCodec(Chirp)
USER_CODEC = TableCodec(User)
