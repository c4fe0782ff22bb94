"""Unit tests for the conversation controller."""

import pytest
from pytest_mock import MockerFixture

from cache.session_store import SessionHistoryStore
from errors import UpstreamUnavailableError
from models.responses import Message
from services.chat import ConversationController


@pytest.mark.asyncio
async def test_turn(controller: ConversationController) -> None:
    """Test the first turn of a new session."""
    response = await controller.turn("507003", "What did Apple release?")

    assert response.session_id == "507003"
    assert "Apple released a phone" in response.answer
    assert response.cached is False
    assert [source.id for source in response.sources] == [1]
    assert response.history == [
        Message(role="user", content="What did Apple release?"),
        Message(role="assistant", content=response.answer),
    ]


@pytest.mark.asyncio
async def test_history_keeps_order(controller: ConversationController) -> None:
    """Test that messages are stored in the order they were exchanged."""
    first = await controller.turn("507003", "What did Apple release?")
    second = await controller.turn("507003", "How is the weather?")

    assert await controller.history("507003") == [
        Message(role="user", content="What did Apple release?"),
        Message(role="assistant", content=first.answer),
        Message(role="user", content="How is the weather?"),
        Message(role="assistant", content=second.answer),
    ]
    assert second.history == await controller.history("507003")


@pytest.mark.asyncio
async def test_sessions_are_independent(controller: ConversationController) -> None:
    """Test that sessions do not share history."""
    await controller.turn("a", "What did Apple release?")
    await controller.turn("b", "How is the weather?")
    assert len(await controller.history("a")) == 2
    assert (await controller.history("b"))[0].content == "How is the weather?"


@pytest.mark.asyncio
async def test_repeated_question_in_other_session_is_cached(
    controller: ConversationController,
) -> None:
    """Test that the answer cache is shared by all sessions."""
    await controller.turn("a", "What did Apple release?")
    response = await controller.turn("b", "What did Apple release?")
    assert response.cached is True
    assert len(response.history) == 2


@pytest.mark.asyncio
async def test_clear(controller: ConversationController) -> None:
    """Test that cleared session starts again from empty history."""
    await controller.turn("507003", "What did Apple release?")
    await controller.clear("507003")
    assert await controller.history("507003") == []

    response = await controller.turn("507003", "How is the weather?")
    assert len(response.history) == 2


@pytest.mark.asyncio
async def test_failed_turn_keeps_history(
    mocker: MockerFixture,
    controller: ConversationController,
    session_store: SessionHistoryStore,
) -> None:
    """Test that nothing is stored when the question can not be answered."""
    await controller.turn("507003", "What did Apple release?")
    before = await session_store.load("507003")
    mocker.patch.object(
        controller.orchestrator,
        "answer",
        side_effect=UpstreamUnavailableError("embeddings", "timeout"),
    )

    with pytest.raises(UpstreamUnavailableError):
        await controller.turn("507003", "How is the weather?")
    assert await session_store.load("507003") == before


@pytest.mark.asyncio
async def test_session_expires(controller: ConversationController, clock) -> None:
    """Test that idle sessions are forgotten."""
    await controller.turn("507003", "What did Apple release?")
    clock.advance(3600)
    assert await controller.history("507003") == []
