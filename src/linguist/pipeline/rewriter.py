"""Free-form rewrite of the whole draft following a user instruction."""

from __future__ import annotations

import logging

from linguist.clients.llm_client import LLMClient

logger = logging.getLogger(__name__)

REWRITE_SYSTEM = """\
You rewrite drafts on request. Keep the author's facts and meaning.
Return only the rewritten text: no preamble, no quotes, no commentary."""


class Rewriter:
    def __init__(self, llm: LLMClient, model: str | None = None):
        self.llm = llm
        self.model = model

    async def rewrite(self, text: str, instruction: str) -> str:
        """Rewrite ``text``; an empty model reply leaves the text as it was."""
        if not instruction or not instruction.strip():
            return text

        prompt = f"""Rewrite this text. Instruction: {instruction.strip()}

TEXT:
\"\"\"
{text}
\"\"\""""

        response = await self.llm.generate(
            prompt=prompt,
            system=REWRITE_SYSTEM,
            model=self.model,
            temperature=0.3,
        )
        rewritten = response.text.strip()
        if not rewritten:
            logger.warning("Rewrite returned empty text; keeping original")
            return text
        return rewritten
