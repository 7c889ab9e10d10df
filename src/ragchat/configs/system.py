from datetime import timedelta

from langchain_core.prompts import PromptTemplate
from pydantic import BaseModel, Field

from ragchat.core.prompt import (
    CONDENSE_QUESTION_VARIABLES,
    CONTEXT_SYSTEM_VARIABLES,
    DEFAULT_CONDENSE_QUESTION_PROMPT,
    DEFAULT_CONTEXT_SYSTEM_PROMPT,
    DEFAULT_TEXT_QA_PROMPT,
    TEXT_QA_VARIABLES,
    build_template,
)


class LLMConfig(BaseModel):
    """OpenAI-compatible chat completion endpoint settings."""

    endpoint: str | None = Field(
        default=None,
        description="Base URL of the model server; None uses the OpenAI default",
    )
    api_key: str | None = Field(default=None, description="API key for the endpoint")
    model_name: str = Field(
        default="gpt-3.5-turbo", description="Model used by direct chat and prediction"
    )
    temperature: float = Field(default=0.1, description="Sampling temperature")
    max_tokens: int | None = Field(
        default=None, description="Maximum tokens in a single completion"
    )
    timeout: timedelta = Field(
        default=timedelta(seconds=60), description="Per-request timeout"
    )
    max_retries: int = Field(
        default=10, description="Retries performed by the client, not the engines"
    )


class ChatConfig(BaseModel):
    """Configuration for the chat engines."""

    context_model_name: str = Field(
        default="gpt-3.5-turbo-16k",
        description="Model used by the context-augmented engine",
    )


class PromptConfig(BaseModel):
    """Prompt templates, as ``str.format`` strings."""

    condense_question_prompt: str = Field(
        default=DEFAULT_CONDENSE_QUESTION_PROMPT,
        description="Rewrites a follow-up into a standalone question",
    )
    context_system_prompt: str = Field(
        default=DEFAULT_CONTEXT_SYSTEM_PROMPT,
        description="System message wrapping retrieved context",
    )
    text_qa_prompt: str = Field(
        default=DEFAULT_TEXT_QA_PROMPT,
        description="Single-shot answer prompt used by the query engine",
    )

    def condense_question_template(self) -> PromptTemplate:
        return build_template(
            self.condense_question_prompt, CONDENSE_QUESTION_VARIABLES
        )

    def context_system_template(self) -> PromptTemplate:
        return build_template(self.context_system_prompt, CONTEXT_SYSTEM_VARIABLES)

    def text_qa_template(self) -> PromptTemplate:
        return build_template(self.text_qa_prompt, TEXT_QA_VARIABLES)


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Level of the ragchat logger")
    json_output: bool = Field(
        default=True, description="Emit JSON lines instead of human-readable text"
    )


class TracingConfig(BaseModel):
    """OpenTelemetry export settings."""

    enabled: bool = Field(default=False, description="Enable OTLP span export")
    endpoint: str | None = Field(
        default=None, description="OTLP HTTP traces endpoint"
    )
    service_name: str = Field(default="ragchat", description="OTEL service.name")
    sample_rate: float = Field(
        default=1.0, ge=0.0, le=1.0, description="Root span sampling ratio"
    )
