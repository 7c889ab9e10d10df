"""Single-shot prediction over a LangChain language model."""

import logging
from collections.abc import Mapping
from typing import Any

from langchain_core.language_models import BaseLanguageModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import PromptTemplate

from ragchat.core.exceptions import PromptTemplateError

logger = logging.getLogger(__name__)


class LLMPredictor:
    """Renders a prompt template and returns the model's text output.

    Works with both completion models (string output) and chat models
    (message output); ``StrOutputParser`` normalises either to ``str``.
    """

    def __init__(self, llm: BaseLanguageModel) -> None:
        self._llm = llm

    async def apredict(
        self, prompt: PromptTemplate, variables: Mapping[str, Any]
    ) -> str:
        """Fill *prompt* with *variables* and predict.

        Raises:
            PromptTemplateError: if *prompt* needs variables that were not
                supplied.  Checked before the model is called.
        """
        missing = sorted(set(prompt.input_variables) - set(variables))
        if missing:
            raise PromptTemplateError(
                f"Missing values for prompt variables: {', '.join(missing)}"
            )
        logger.debug("Predicting with variables %s", sorted(variables))
        chain = prompt | self._llm | StrOutputParser()
        return await chain.ainvoke(dict(variables))
