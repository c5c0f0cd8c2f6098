"""PostgreSQL number sequence repository implementation."""

from uuid import UUID

from psycopg import AsyncConnection

from docflow.domain.entities import NumberSequence
from docflow.domain.exceptions import Conflict

_COLUMNS = "id, code, prefix, padding, current_value, updated_at"


def _row_to_sequence(r: tuple) -> NumberSequence:
    return NumberSequence(
        id=r[0],
        code=r[1],
        prefix=r[2],
        padding=r[3],
        current_value=r[4],
        updated_at=r[5],
    )


class PostgresSequenceRepository:
    """Number sequence repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_code_for_update(self, code: str) -> NumberSequence | None:
        """Get sequence by code and row-lock it until the transaction ends."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM number_sequence WHERE code = %s FOR UPDATE",
            (code,),
        )
        r = await cur.fetchone()
        return _row_to_sequence(r) if r else None

    async def advance(self, sequence_id: UUID, expected: int, new_value: int) -> None:
        """Set current_value to new_value if it still equals expected."""
        cur = await self._conn.execute(
            "UPDATE number_sequence SET current_value = %s, updated_at = NOW() "
            "WHERE id = %s AND current_value = %s",
            (new_value, sequence_id, expected),
        )
        if cur.rowcount == 0:
            raise Conflict(f"sequence {sequence_id} is no longer at {expected}")
