"""Errors raised by the chat engines themselves.

Failures from the language model or the retriever are never wrapped;
they propagate to the caller exactly as the gateway raised them.
"""


class PromptTemplateError(ValueError):
    """Raised when a prompt template does not reference the variables it is
    filled with.  Always raised before any gateway call is issued."""
