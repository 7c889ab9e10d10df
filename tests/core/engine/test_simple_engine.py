"""Unit tests for the direct (no retrieval) chat engine."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from stubs import FailingChatGateway, StubChatGateway
from ragchat.core.engine import SimpleChatEngine
from ragchat.core.engine.history import message_role


class TestSimpleChatEngine:
    @pytest.mark.asyncio
    async def test_reply_is_returned_without_sources(self, chat_gateway):
        engine = SimpleChatEngine(llm=chat_gateway)

        response = await engine.achat("hi")

        assert response.response == "Hello!"
        assert response.source_nodes == []
        assert str(response) == "Hello!"

    @pytest.mark.asyncio
    async def test_last_two_history_entries_are_the_turn(self, chat_gateway):
        engine = SimpleChatEngine(llm=chat_gateway)

        await engine.achat("hi")

        last_two = engine.chat_history.messages[-2:]
        assert isinstance(last_two[0], HumanMessage)
        assert last_two[0].content == "hi"
        assert isinstance(last_two[1], AIMessage)
        assert last_two[1].content == "Hello!"

    @pytest.mark.asyncio
    async def test_second_call_sends_accumulated_history(self, chat_gateway):
        engine = SimpleChatEngine(llm=chat_gateway)

        await engine.achat("hi")
        await engine.achat("how are you?")

        first_request, _ = chat_gateway.calls[0]
        second_request, _ = chat_gateway.calls[1]
        assert len(first_request) == 1
        assert [message_role(m) for m in second_request] == [
            "user",
            "assistant",
            "user",
        ]
        assert second_request[-1].content == "how are you?"
        assert len(engine.chat_history) == 4

    @pytest.mark.asyncio
    async def test_explicit_history_is_mutated_and_adopted(self, chat_gateway):
        engine = SimpleChatEngine(llm=chat_gateway)
        external = [HumanMessage(content="earlier"), AIMessage(content="reply")]

        await engine.achat("hi", chat_history=external)

        assert len(external) == 4
        assert external[-1].content == "Hello!"
        assert engine.chat_history.messages is external

        await engine.achat("again")
        request, _ = chat_gateway.calls[1]
        assert len(request) == 5

    @pytest.mark.asyncio
    async def test_content_blocks_reply_is_flattened_to_text(self):
        gateway = StubChatGateway(
            replies=[[{"type": "text", "text": "Paris."}, {"type": "image_url"}]]
        )
        engine = SimpleChatEngine(llm=gateway)

        response = await engine.achat("What is the capital of France?")

        assert response.response == "Paris."
        assert [message_role(m) for m in engine.chat_history.messages] == [
            "user",
            "assistant",
        ]

    @pytest.mark.asyncio
    async def test_gateway_failure_propagates_unchanged(self):
        error = TimeoutError("model timed out")
        gateway = FailingChatGateway(error)
        engine = SimpleChatEngine(llm=gateway)

        with pytest.raises(TimeoutError) as exc_info:
            await engine.achat("hi")

        assert exc_info.value is error
        assert gateway.calls == 1
        # The user message was already recorded; no assistant reply follows.
        assert [m.content for m in engine.chat_history.messages] == ["hi"]

    @pytest.mark.asyncio
    async def test_snapshot_restore_makes_a_failed_turn_atomic(self):
        engine = SimpleChatEngine(llm=FailingChatGateway(ConnectionError("down")))
        snapshot = engine.chat_history.snapshot()

        with pytest.raises(ConnectionError):
            await engine.achat("hi")
        engine.chat_history.restore(snapshot)

        assert engine.chat_history.messages == []

    @pytest.mark.asyncio
    async def test_reset_clears_history(self, chat_gateway):
        engine = SimpleChatEngine(llm=chat_gateway)
        await engine.achat("hi")
        await engine.achat("how are you?")

        engine.reset()

        assert engine.chat_history.messages == []

    def test_reset_twice_equals_reset_once(self):
        engine = SimpleChatEngine(
            llm=StubChatGateway(), chat_history=[HumanMessage(content="x")]
        )

        engine.reset()
        engine.reset()

        assert engine.chat_history.messages == []

    def test_chat_repl_is_not_implemented(self, chat_gateway):
        engine = SimpleChatEngine(llm=chat_gateway)
        with pytest.raises(NotImplementedError):
            engine.chat_repl()
