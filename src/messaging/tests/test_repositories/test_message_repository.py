"""
Tests for MessageRepository: ordering, page windows and argument checks.
"""

import pytest
from sqlalchemy import inspect

from messaging.exceptions.base import InvalidArgumentError
from messaging.repositories import FetchPlan, MessageRepository
from messaging.validators.pagination_validators import SortDirection
from ..test_fixtures.model_fixtures import at


def ids(rows) -> list[int]:
    return [row.id for row in rows]


@pytest.fixture
async def long_conversation(seed) -> int:
    """
    Conversation 30 with eleven messages; several share a timestamp.

    Ids are inserted out of date order so id order and date order differ.
    """
    seed.conversation(30, {1: [], 2: []})
    dates = {
        301: at(9), 302: at(8), 303: at(8), 304: at(10), 305: at(7),
        306: at(8), 307: at(11), 308: at(10), 309: at(6), 310: at(12), 311: at(9),
    }
    for message_id, date in dates.items():
        seed.message(message_id, 30, 1 if message_id % 2 else 2, date)
    await seed.done()
    return 30


# (date, id) ascending for long_conversation
LONG_ASC = [309, 305, 302, 303, 306, 301, 311, 304, 308, 307, 310]


@pytest.mark.asyncio
class TestOrdering:

    async def test_shared_date_is_ordered_by_id(self, message_repository: MessageRepository, seed):
        """
        Behavior:
            Messages dated [day1#5, day1#3, day2#1] sorted ascending come back 3, 5, 1.
        Importance:
            id breaks ties in the same direction as date, so pages never shuffle.
        """
        # Arrange
        seed.conversation(20, {1: []})
        seed.message(5, 20, 1, at(0, day=0))
        seed.message(3, 20, 1, at(0, day=0))
        seed.message(1, 20, 1, at(0, day=1))
        await seed.done()

        # Act
        messages = await message_repository.find_messages(20)

        # Assert
        assert ids(messages) == [3, 5, 1]

    async def test_desc_is_exact_reverse_of_asc(self, message_repository: MessageRepository, long_conversation):
        asc = await message_repository.find_messages(long_conversation, 0, 100, SortDirection.ASC)
        desc = await message_repository.find_messages(long_conversation, 0, 100, SortDirection.DESC)

        assert ids(asc) == LONG_ASC
        assert ids(desc) == list(reversed(LONG_ASC))

    async def test_sort_direction_accepts_strings_in_any_case(
        self, message_repository: MessageRepository, long_conversation
    ):
        desc = await message_repository.find_messages(long_conversation, 0, 3, "desc")

        assert ids(desc) == [310, 307, 308]

    async def test_default_window_is_first_twenty_ascending(
        self, message_repository: MessageRepository, long_conversation
    ):
        messages = await message_repository.find_messages(long_conversation)

        assert ids(messages) == LONG_ASC

    async def test_only_messages_of_the_conversation(self, message_repository: MessageRepository, scenario):
        messages = await message_repository.find_messages(2)

        assert ids(messages) == [6]
        assert all(m.conversation_id == 2 for m in messages)


@pytest.mark.asyncio
class TestPageWindow:

    async def test_pages_reconstruct_the_full_list(self, message_repository: MessageRepository, long_conversation):
        """
        Behavior:
            Walking offset in steps of `limit` yields every message exactly once,
            in order, for a conversation with more than 2 * limit messages.
        """
        limit = 4
        collected: list[int] = []

        for offset in range(0, len(LONG_ASC) + limit, limit):
            page = await message_repository.find_messages(long_conversation, offset, limit)
            assert len(page) <= limit
            collected.extend(ids(page))

        assert collected == LONG_ASC

    async def test_pages_reconstruct_descending(self, message_repository: MessageRepository, long_conversation):
        collected: list[int] = []
        for offset in range(0, 12, 3):
            collected.extend(ids(await message_repository.find_messages(long_conversation, offset, 3, "DESC")))

        assert collected == list(reversed(LONG_ASC))

    async def test_limit_zero_yields_empty_page(self, message_repository: MessageRepository, long_conversation):
        assert await message_repository.find_messages(long_conversation, 0, 0) == []

    async def test_offset_past_end_yields_empty_page(self, message_repository: MessageRepository, long_conversation):
        assert await message_repository.find_messages(long_conversation, 50, 10) == []

    async def test_last_partial_page(self, message_repository: MessageRepository, long_conversation):
        page = await message_repository.find_messages(long_conversation, 9, 5)

        assert ids(page) == LONG_ASC[9:]

    async def test_unknown_conversation_yields_empty_page(self, message_repository: MessageRepository, scenario):
        assert await message_repository.find_messages(999) == []


@pytest.mark.asyncio
class TestInvalidArguments:

    @pytest.mark.parametrize(
        "offset, limit, field",
        [
            (-1, 10, "offset"),
            (0, -5, "limit"),
            ("3", 10, "offset"),
            (0, 2.5, "limit"),
            (True, 10, "offset"),
            (0, None, "limit"),
        ],
    )
    async def test_rejects_malformed_window(self, message_repository: MessageRepository, offset, limit, field):
        with pytest.raises(InvalidArgumentError) as exc_info:
            await message_repository.find_messages(1, offset, limit)

        assert exc_info.value.fields == [field]
        assert exc_info.value.error_code == "invalid_argument"

    async def test_rejects_unknown_sort_direction(self, message_repository: MessageRepository):
        with pytest.raises(InvalidArgumentError) as exc_info:
            await message_repository.find_messages(1, 0, 10, "sideways")

        assert exc_info.value.fields == ["sort_direction"]

    async def test_rejected_before_any_query(self, message_repository: MessageRepository, monkeypatch):
        """
        Behavior:
            Malformed input never reaches the session.
        """
        async def fail_execute(*args, **kwargs):
            raise AssertionError("query executed")

        monkeypatch.setattr(message_repository.db, "execute", fail_execute)

        with pytest.raises(InvalidArgumentError):
            await message_repository.find_messages(1, -1, 10)


@pytest.mark.asyncio
class TestLoadingAndCount:

    async def test_sender_is_eager_loaded(self, message_repository: MessageRepository, scenario):
        messages = await message_repository.find_messages(1)

        assert all("sender" not in inspect(m).unloaded for m in messages)
        assert [m.sender.id if m.sender else None for m in messages] == [1, 2, 1, 2, None]

    async def test_recipients_not_loaded_by_default(self, message_repository: MessageRepository, scenario):
        messages = await message_repository.find_messages(1)

        assert all("recipients" in inspect(m).unloaded for m in messages)

    async def test_recipients_loaded_on_request(self, message_repository: MessageRepository, scenario):
        with_recipients = await message_repository.find_messages(1, plan=FetchPlan(message_recipients=True))
        read = {m.id: [r.is_read for r in m.recipients] for m in with_recipients}
        assert read[2] == [True]
        assert read[3] == [False]

    async def test_count_messages(self, message_repository: MessageRepository, scenario):
        assert await message_repository.count_messages(1) == 5
        assert await message_repository.count_messages(4) == 0
        assert await message_repository.count_messages(999) == 0
