"""Unit tests for question condensation and the condense-question engine."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage
from langchain_core.prompts import PromptTemplate

from stubs import StubPredictor, StubQueryEngine, make_node
from ragchat.core.engine import CondenseQuestionChatEngine, QuestionCondenser
from ragchat.core.exceptions import PromptTemplateError
from ragchat.core.gateways import ServiceContext
from ragchat.core.models import Response


def _answer(text: str = "X is a letter.") -> Response:
    return Response(response=text, source_nodes=[make_node("X docs").node])


# ---------------------------------------------------------------------------
# QuestionCondenser
# ---------------------------------------------------------------------------


class TestQuestionCondenser:
    @pytest.mark.asyncio
    async def test_empty_history_passes_question_through(self):
        predictor = StubPredictor()
        condenser = QuestionCondenser(
            predictor, PromptTemplate.from_template("{chat_history}\n{question}")
        )

        result = await condenser.acondense([], "What is X?")

        assert result == "What is X?"
        assert predictor.calls == []

    @pytest.mark.asyncio
    async def test_history_is_rendered_as_role_lines(self):
        predictor = StubPredictor(output="What is the capital of Spain?")
        prompt = PromptTemplate.from_template("{chat_history}\n{question}")
        condenser = QuestionCondenser(predictor, prompt)
        history = [
            HumanMessage(content="What is the capital of France?"),
            AIMessage(content="Paris."),
        ]

        result = await condenser.acondense(history, "And Spain?")

        assert result == "What is the capital of Spain?"
        used_prompt, variables = predictor.calls[0]
        assert used_prompt is prompt
        assert variables == {
            "question": "And Spain?",
            "chat_history": "user: What is the capital of France?\n"
            "assistant: Paris.",
        }

    def test_prompt_without_history_variable_is_rejected(self):
        with pytest.raises(PromptTemplateError, match="chat_history"):
            QuestionCondenser(
                StubPredictor(), PromptTemplate.from_template("Rewrite: {question}")
            )


# ---------------------------------------------------------------------------
# CondenseQuestionChatEngine
# ---------------------------------------------------------------------------


class TestCondenseQuestionChatEngine:
    @pytest.mark.asyncio
    async def test_first_turn_queries_with_raw_message(self, service_context):
        query_engine = StubQueryEngine(_answer())
        engine = CondenseQuestionChatEngine(
            query_engine=query_engine, service_context=service_context
        )

        response = await engine.achat("What is X?")

        assert query_engine.queries == ["What is X?"]
        assert service_context.llm_predictor.calls == []
        assert response is query_engine.response

    @pytest.mark.asyncio
    async def test_follow_up_is_condensed_before_querying(self, chat_gateway):
        log: list = []
        predictor = StubPredictor(output="What is Y in X?", log=log)
        query_engine = StubQueryEngine(_answer("Y is part of X."), log=log)
        engine = CondenseQuestionChatEngine(
            query_engine=query_engine,
            service_context=ServiceContext(
                llm_predictor=predictor, chat_gateway=chat_gateway
            ),
            chat_history=[
                HumanMessage(content="What is X?"),
                AIMessage(content="X is a letter."),
            ],
        )

        await engine.achat("And Y?")

        assert [kind for kind, _ in log] == ["predict", "query"]
        assert query_engine.queries == ["What is Y in X?"]

    @pytest.mark.asyncio
    async def test_history_records_original_message(self, chat_gateway):
        predictor = StubPredictor(output="a rewritten question")
        engine = CondenseQuestionChatEngine(
            query_engine=StubQueryEngine(_answer("answer")),
            service_context=ServiceContext(
                llm_predictor=predictor, chat_gateway=chat_gateway
            ),
            chat_history=[HumanMessage(content="q1"), AIMessage(content="a1")],
        )

        await engine.achat("follow up")

        last_two = engine.chat_history.messages[-2:]
        assert isinstance(last_two[0], HumanMessage)
        assert last_two[0].content == "follow up"
        assert isinstance(last_two[1], AIMessage)
        assert last_two[1].content == "answer"

    @pytest.mark.asyncio
    async def test_explicit_history_is_mutated_and_adopted(self, service_context):
        query_engine = StubQueryEngine(_answer("Y is part of X."))
        engine = CondenseQuestionChatEngine(
            query_engine=query_engine, service_context=service_context
        )
        external = [HumanMessage(content="What is X?"), AIMessage(content="A letter.")]

        await engine.achat("And Y?", chat_history=external)

        _, variables = service_context.llm_predictor.calls[0]
        assert variables["chat_history"] == "user: What is X?\nassistant: A letter."
        assert query_engine.queries == ["condensed question"]
        assert [m.content for m in external] == [
            "What is X?",
            "A letter.",
            "And Y?",
            "Y is part of X.",
        ]
        assert engine.chat_history.messages is external

        await engine.achat("And Z?")
        _, variables = service_context.llm_predictor.calls[1]
        assert variables["chat_history"].count("\n") == 3
        assert len(external) == 6

    @pytest.mark.asyncio
    async def test_configured_prompt_is_used(self, service_context):
        prompt = PromptTemplate.from_template("H:{chat_history} Q:{question}")
        engine = CondenseQuestionChatEngine(
            query_engine=StubQueryEngine(_answer()),
            service_context=service_context,
            chat_history=[HumanMessage(content="a"), AIMessage(content="b")],
            condense_message_prompt=prompt,
        )

        await engine.achat("c")

        used_prompt, _ = service_context.llm_predictor.calls[0]
        assert used_prompt is prompt

    def test_default_prompt_comes_from_service_context(self, service_context):
        engine = CondenseQuestionChatEngine(
            query_engine=StubQueryEngine(_answer()), service_context=service_context
        )
        assert set(engine.condense_message_prompt.input_variables) == {
            "question",
            "chat_history",
        }

    @pytest.mark.asyncio
    async def test_query_failure_leaves_history_untouched(self, service_context):
        class BrokenQueryEngine:
            async def aquery(self, query):
                raise ConnectionError("index unavailable")

        engine = CondenseQuestionChatEngine(
            query_engine=BrokenQueryEngine(), service_context=service_context
        )

        with pytest.raises(ConnectionError):
            await engine.achat("What is X?")

        assert engine.chat_history.messages == []

    @pytest.mark.asyncio
    async def test_reset_clears_history(self, service_context):
        engine = CondenseQuestionChatEngine(
            query_engine=StubQueryEngine(_answer()), service_context=service_context
        )
        await engine.achat("What is X?")

        engine.reset()
        engine.reset()

        assert engine.chat_history.messages == []

    def test_chat_repl_is_not_implemented(self, service_context):
        engine = CondenseQuestionChatEngine(
            query_engine=StubQueryEngine(_answer()), service_context=service_context
        )
        with pytest.raises(NotImplementedError):
            engine.chat_repl()
