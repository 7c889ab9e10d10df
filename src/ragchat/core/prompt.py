"""Default prompt texts and template validation.

Templates use ``str.format`` placeholders and are turned into LangChain
``PromptTemplate`` objects via ``build_template``, which checks that every
variable the caller will supply is actually referenced.
"""

from collections.abc import Iterable

from langchain_core.prompts import PromptTemplate

from .exceptions import PromptTemplateError

# Variable names -- shared by templates and the code that fills them.
VAR_QUESTION = "question"
VAR_CHAT_HISTORY = "chat_history"
VAR_CONTEXT = "context"
VAR_QUERY = "query"

CONDENSE_QUESTION_VARIABLES = frozenset({VAR_QUESTION, VAR_CHAT_HISTORY})
CONTEXT_SYSTEM_VARIABLES = frozenset({VAR_CONTEXT})
TEXT_QA_VARIABLES = frozenset({VAR_CONTEXT, VAR_QUERY})


DEFAULT_CONDENSE_QUESTION_PROMPT = """Given a conversation (between Human and Assistant) and a follow up message from Human, rewrite the message to be a standalone question that captures all relevant context from the conversation.

<Chat History>
{chat_history}

<Follow Up Message>
{question}

<Standalone question>
"""  # noqa: E501

DEFAULT_CONTEXT_SYSTEM_PROMPT = """Context information is below.
---------------------
{context}
---------------------"""

DEFAULT_TEXT_QA_PROMPT = """Context information is below.
---------------------
{context}
---------------------
Given the context information and not prior knowledge, answer the query.
Query: {query}
Answer:"""


def require_variables(template: PromptTemplate, required: Iterable[str]) -> None:
    """Raise ``PromptTemplateError`` unless *template* uses every *required* name."""
    missing = sorted(set(required) - set(template.input_variables))
    if missing:
        raise PromptTemplateError(
            f"Prompt template is missing required variables: {', '.join(missing)}"
        )


def build_template(text: str, required: Iterable[str]) -> PromptTemplate:
    """Parse *text* into a ``PromptTemplate`` and validate its variables."""
    template = PromptTemplate.from_template(text)
    require_variables(template, required)
    return template
