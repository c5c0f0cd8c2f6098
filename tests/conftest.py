"""Pytest fixtures for docflow tests."""

from __future__ import annotations

import asyncio
import copy
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest

from docflow.application.services.sequence_allocator import SequenceAllocator
from docflow.domain.entities import Document, DocumentSigner, NumberSequence, Signer
from docflow.domain.exceptions import Conflict, StorageError
from docflow.domain.value_objects import DocumentStatus


# --- In-memory database ---


class InMemoryDatabase:
    """Committed state shared by fake units of work.

    Transactions see committed rows plus their own pending writes (read
    committed). Row locks are asyncio locks held until commit/rollback.
    ``fail_on`` raises ``StorageError`` at the named operation and
    ``block_on`` parks the caller there until the event is set.
    """

    def __init__(self) -> None:
        self.tables: dict[str, dict[UUID, object]] = defaultdict(dict)
        self.row_locks: dict[tuple[str, UUID], asyncio.Lock] = {}
        self.fail_on: set[str] = set()
        self.block_on: dict[str, asyncio.Event] = {}
        self.commits = 0
        self.rollbacks = 0

    def lock_for(self, table: str, key: UUID) -> asyncio.Lock:
        return self.row_locks.setdefault((table, key), asyncio.Lock())

    def add_sequence(
        self, code: str, prefix: str = "DT-", padding: int = 4, current_value: int = 0
    ) -> NumberSequence:
        seq = NumberSequence(
            id=uuid4(),
            code=code,
            prefix=prefix,
            padding=padding,
            current_value=current_value,
        )
        self.tables["number_sequence"][seq.id] = seq
        return seq

    def add_signer(self, full_name: str, email: str = "") -> Signer:
        signer = Signer(id=uuid4(), code=full_name.upper().replace(" ", "_"), full_name=full_name, email=email)
        self.tables["signer"][signer.id] = signer
        return signer

    def sequence(self, code: str) -> NumberSequence:
        for seq in self.tables["number_sequence"].values():
            if seq.code == code:
                return seq
        raise KeyError(code)

    def documents(self) -> list[Document]:
        return list(self.tables["document"].values())

    def roster(self, document_id: UUID) -> list[DocumentSigner]:
        return sorted(
            (r for r in self.tables["document_signer"].values() if r.document_id == document_id),
            key=lambda r: r.order_no,
        )


class FakeTransaction:
    """Pending writes and held locks of one unit of work."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._db = db
        self._pending: dict[str, dict[UUID, object]] = defaultdict(dict)
        self._held: list[asyncio.Lock] = []

    async def checkpoint(self, operation: str) -> None:
        event = self._db.block_on.get(operation)
        if event is not None:
            await event.wait()
        if operation in self._db.fail_on:
            raise StorageError(f"injected failure at {operation}")

    def get(self, table: str, key: UUID) -> object | None:
        row = self._pending[table].get(key, self._db.tables[table].get(key))
        return copy.deepcopy(row)

    def rows(self, table: str) -> list[object]:
        merged = {**self._db.tables[table], **self._pending[table]}
        return [copy.deepcopy(r) for r in merged.values()]

    def put(self, table: str, key: UUID, row: object) -> None:
        self._pending[table][key] = copy.deepcopy(row)

    async def lock(self, table: str, key: UUID) -> None:
        lock = self._db.lock_for(table, key)
        if lock in self._held:
            return
        await lock.acquire()
        self._held.append(lock)
        # let contending transactions run up to the lock
        await asyncio.sleep(0)

    def commit(self) -> None:
        for table, rows in self._pending.items():
            self._db.tables[table].update(rows)
        self._pending.clear()
        self._db.commits += 1
        self._release()

    def rollback(self) -> None:
        self._pending.clear()
        self._db.rollbacks += 1
        self._release()

    def _release(self) -> None:
        while self._held:
            self._held.pop().release()


# --- Fake repositories ---


class FakeSequenceRepository:
    """In-memory number sequence repository with row locks."""

    def __init__(self, tx: FakeTransaction) -> None:
        self._tx = tx

    def _find(self, code: str) -> NumberSequence | None:
        for seq in self._tx.rows("number_sequence"):
            if seq.code == code:
                return seq
        return None

    async def get_by_code_for_update(self, code: str) -> NumberSequence | None:
        seq = self._find(code)
        if seq is None:
            return None
        await self._tx.lock("number_sequence", seq.id)
        # re-read after the wait, like PostgreSQL does for FOR UPDATE
        return self._tx.get("number_sequence", seq.id)

    async def advance(self, sequence_id: UUID, expected: int, new_value: int) -> None:
        await self._tx.checkpoint("sequences.advance")
        seq = self._tx.get("number_sequence", sequence_id)
        if seq is None or seq.current_value != expected:
            raise Conflict(f"sequence {sequence_id} is no longer at {expected}")
        seq.current_value = new_value
        self._tx.put("number_sequence", sequence_id, seq)


class FakeDocumentRepository:
    """In-memory document repository."""

    def __init__(self, tx: FakeTransaction) -> None:
        self._tx = tx

    async def get_by_id(self, document_id: UUID, *, for_update: bool = False) -> Document | None:
        if for_update:
            await self._tx.lock("document", document_id)
        return self._tx.get("document", document_id)

    async def list(
        self,
        *,
        status: DocumentStatus | None = None,
        limit: int = 50,
    ) -> list[Document]:
        items = [
            d for d in self._tx.rows("document") if status is None or d.status == status
        ]
        items.sort(key=lambda d: d.created_at, reverse=True)
        return items[:limit]

    async def create(self, document: Document) -> Document:
        await self._tx.checkpoint("documents.create")
        for existing in self._tx.rows("document"):
            if existing.sequence_id == document.sequence_id and existing.number == document.number:
                raise StorageError(f"duplicate number {document.number}")
        self._tx.put("document", document.id, document)
        return document

    async def update(self, document: Document) -> Document:
        await self._tx.checkpoint("documents.update")
        self._tx.put("document", document.id, document)
        return document


class FakeDocumentSignerRepository:
    """In-memory roster repository."""

    def __init__(self, tx: FakeTransaction) -> None:
        self._tx = tx

    async def create_batch(self, rows: list[DocumentSigner]) -> list[DocumentSigner]:
        await self._tx.checkpoint("document_signers.create_batch")
        for r in rows:
            self._tx.put("document_signer", r.id, r)
        return rows

    async def get(
        self, document_id: UUID, signer_id: UUID, *, for_update: bool = False
    ) -> DocumentSigner | None:
        for r in self._tx.rows("document_signer"):
            if r.document_id == document_id and r.signer_id == signer_id:
                if for_update:
                    await self._tx.lock("document_signer", r.id)
                return self._tx.get("document_signer", r.id)
        return None

    async def list_by_documents(self, document_ids: list[UUID]) -> list[DocumentSigner]:
        wanted = set(document_ids)
        return sorted(
            (r for r in self._tx.rows("document_signer") if r.document_id in wanted),
            key=lambda r: (str(r.document_id), r.order_no),
        )

    async def update(self, row: DocumentSigner) -> DocumentSigner:
        await self._tx.checkpoint("document_signers.update")
        self._tx.put("document_signer", row.id, row)
        return row


class FakeSignerRepository:
    """In-memory signer lookups."""

    def __init__(self, tx: FakeTransaction) -> None:
        self._tx = tx

    async def get_by_ids(self, signer_ids: list[UUID]) -> list[Signer]:
        wanted = set(signer_ids)
        return [s for s in self._tx.rows("signer") if s.id in wanted]


# --- Fake UnitOfWork ---


class FakeUnitOfWork:
    """In-memory Unit of Work over an InMemoryDatabase."""

    def __init__(self, db: InMemoryDatabase) -> None:
        self._tx = FakeTransaction(db)
        self.sequences = FakeSequenceRepository(self._tx)
        self.documents = FakeDocumentRepository(self._tx)
        self.document_signers = FakeDocumentSignerRepository(self._tx)
        self.signers = FakeSignerRepository(self._tx)

    async def commit(self) -> None:
        self._tx.commit()

    async def rollback(self) -> None:
        self._tx.rollback()


def make_uow_factory(db: InMemoryDatabase):
    """Factory with the same commit/rollback contract as the PostgreSQL one."""

    @asynccontextmanager
    async def factory() -> AsyncIterator[FakeUnitOfWork]:
        uow = FakeUnitOfWork(db)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


# --- Fixtures ---


@pytest.fixture
def db() -> InMemoryDatabase:
    """Fresh in-memory database with the DOC-TEST sequence seeded."""
    database = InMemoryDatabase()
    database.add_sequence("DOC-TEST", prefix="DT-", padding=4, current_value=0)
    return database


@pytest.fixture
def uow_factory(db: InMemoryDatabase):
    return make_uow_factory(db)


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def allocator() -> SequenceAllocator:
    return SequenceAllocator(max_attempts=3)


@pytest.fixture
def signer_a(db: InMemoryDatabase) -> Signer:
    return db.add_signer("Alice Archer", "alice@example.com")


@pytest.fixture
def signer_b(db: InMemoryDatabase) -> Signer:
    return db.add_signer("Bob Baker", "bob@example.com")
