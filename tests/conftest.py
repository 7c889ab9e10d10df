"""Fixtures shared by the chat engine tests; the stubs live in ``stubs``."""

import pytest
from stubs import StubChatGateway, StubPredictor

from ragchat.core.gateways import ServiceContext


@pytest.fixture()
def chat_gateway() -> StubChatGateway:
    return StubChatGateway(replies=["Hello!", "Fine, thanks.", "Bye."])


@pytest.fixture()
def predictor() -> StubPredictor:
    return StubPredictor()


@pytest.fixture()
def service_context(predictor, chat_gateway) -> ServiceContext:
    return ServiceContext(llm_predictor=predictor, chat_gateway=chat_gateway)
