"""LLM-backed news generator using LangChain structured output.

One chat model call per day advance. The model is constrained to
``NEWS_SCHEMA``; a response that does not parse against it is treated as an
empty payload, so ``NewsGenerator`` fills in neutral field defaults. Any
error raised by the call itself propagates to ``NewsGenerator.generate``,
which substitutes the fallback event.
"""

from __future__ import annotations

import logging
from typing import Any

from dotenv import load_dotenv
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable

from models.config import NewsConfig
from news.base import NewsGenerator
from news.prompts import NEWS_SCHEMA, SYSTEM_PROMPT, USER_PROMPT
from news.registry import register

load_dotenv()  # auto-load .env file if present

logger = logging.getLogger(__name__)


def _create_llm(config: NewsConfig):
    """Instantiate the appropriate LangChain chat model from config."""
    provider = config.llm_provider.lower()

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        return ChatOpenAI(
            model=config.llm_model,
            temperature=config.temperature,
        )
    elif provider == "anthropic":
        from langchain_anthropic import ChatAnthropic

        return ChatAnthropic(
            model=config.llm_model,
            temperature=config.temperature,
        )
    else:
        raise ValueError(
            f"Unsupported LLM provider '{provider}'. "
            f"Supported: 'openai', 'anthropic'."
        )


@register("llm")
class LLMNewsGenerator(NewsGenerator):
    """Asks a chat model for one structured news item per day.

    The chain is built on first use so that a missing API key or an
    unsupported provider surfaces as a provider failure (fallback news)
    rather than at session start.
    """

    def __init__(self, config: NewsConfig | None = None) -> None:
        super().__init__(config)
        self._chain: Runnable | None = None

    def _build_chain(self) -> Runnable:
        prompt = ChatPromptTemplate.from_messages([
            ("system", SYSTEM_PROMPT),
            ("user", USER_PROMPT),
        ])
        llm = _create_llm(self.config)
        return prompt | llm.with_structured_output(NEWS_SCHEMA, include_raw=True)

    async def _fetch(self, day: int, sectors: list[str]) -> Any:
        if self._chain is None:
            self._chain = self._build_chain()

        result = await self._chain.ainvoke({
            "day": day,
            "sectors": ", ".join(sectors),
        })

        parsing_error = result.get("parsing_error")
        if parsing_error is not None:
            logger.warning(
                "News response for day %d did not match the schema: %s",
                day,
                parsing_error,
            )
            return {}

        parsed = result.get("parsed")
        logger.debug("News payload for day %d: %s", day, parsed)
        return parsed
