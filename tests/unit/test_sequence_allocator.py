"""Unit tests for SequenceAllocator."""

import asyncio
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from docflow.application.services.sequence_allocator import SequenceAllocator
from docflow.domain.entities import NumberSequence
from docflow.domain.exceptions import Conflict, NotFound, StorageError

from tests.conftest import InMemoryDatabase, make_uow_factory


@pytest.mark.asyncio
async def test_allocate_formats_and_advances(db: InMemoryDatabase, uow_factory) -> None:
    allocator = SequenceAllocator()
    async with uow_factory() as uow:
        sequence, number = await allocator.allocate(uow, "DOC-TEST")
    assert str(number) == "DT-0001"
    assert sequence.current_value == 1
    assert db.sequence("DOC-TEST").current_value == 1


@pytest.mark.asyncio
async def test_unknown_code_is_not_found(uow_factory) -> None:
    with pytest.raises(NotFound) as info:
        async with uow_factory() as uow:
            await SequenceAllocator().allocate(uow, "NOPE")
    assert info.value.identifier == "NOPE"


@pytest.mark.asyncio
async def test_rollback_restores_counter(db: InMemoryDatabase, uow_factory) -> None:
    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await SequenceAllocator().allocate(uow, "DOC-TEST")
            raise RuntimeError("insert failed")
    assert db.sequence("DOC-TEST").current_value == 0


@pytest.mark.asyncio
async def test_concurrent_allocations_are_contiguous(db: InMemoryDatabase) -> None:
    factory = make_uow_factory(db)
    allocator = SequenceAllocator()

    async def allocate_one() -> str:
        async with factory() as uow:
            _, number = await allocator.allocate(uow, "DOC-TEST")
            await asyncio.sleep(0)
            return str(number)

    numbers = await asyncio.gather(*(allocate_one() for _ in range(20)))
    assert sorted(numbers) == [f"DT-{i:04d}" for i in range(1, 21)]
    assert db.sequence("DOC-TEST").current_value == 20


@pytest.mark.asyncio
async def test_different_codes_do_not_block_each_other(db: InMemoryDatabase) -> None:
    db.add_sequence("INV", prefix="INV-", padding=3)
    factory = make_uow_factory(db)
    allocator = SequenceAllocator()
    release = asyncio.Event()

    async def hold_doc_test() -> None:
        async with factory() as uow:
            await allocator.allocate(uow, "DOC-TEST")
            await release.wait()

    holder = asyncio.create_task(hold_doc_test())
    await asyncio.sleep(0)
    async with factory() as uow:
        _, number = await asyncio.wait_for(allocator.allocate(uow, "INV"), timeout=1)
    assert str(number) == "INV-001"
    release.set()
    await holder


def _stub_uow(sequence: NumberSequence, advance: AsyncMock) -> MagicMock:
    uow = MagicMock()
    uow.sequences.get_by_code_for_update = AsyncMock(return_value=sequence)
    uow.sequences.advance = advance
    return uow


@pytest.mark.asyncio
async def test_conflict_is_retried() -> None:
    sequence = NumberSequence(id=uuid4(), code="X", prefix="X-", padding=2, current_value=4)
    advance = AsyncMock(side_effect=[Conflict("moved"), None])
    uow = _stub_uow(sequence, advance)

    _, number = await SequenceAllocator(max_attempts=3).allocate(uow, "X")

    assert str(number) == "X-05"
    assert advance.await_count == 2
    assert uow.sequences.get_by_code_for_update.await_count == 2


@pytest.mark.asyncio
async def test_conflict_exhausted_raises_storage_error() -> None:
    sequence = NumberSequence(id=uuid4(), code="X", prefix="X-", padding=2, current_value=4)
    advance = AsyncMock(side_effect=Conflict("moved"))
    uow = _stub_uow(sequence, advance)

    with pytest.raises(StorageError, match="after 2 attempts"):
        await SequenceAllocator(max_attempts=2).allocate(uow, "X")


def test_max_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        SequenceAllocator(max_attempts=0)
