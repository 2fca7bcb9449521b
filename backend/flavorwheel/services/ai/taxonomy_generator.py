"""AI category taxonomy generation."""

import logging
from datetime import datetime

from langchain_core.prompts import ChatPromptTemplate
from pydantic import ValidationError

from flavorwheel.schemas.taxonomy import TaxonomyPayload
from flavorwheel.services.ai.base import BaseAIService
from flavorwheel.services.ai.constants import BASE_TEMPLATES, TAXONOMY_MAX_TOKENS
from flavorwheel.services.ai.prompts import PromptRegistry
from flavorwheel.services.exceptions import AIResponseFormatError, AIUnavailableError

logger = logging.getLogger(__name__)


class AITaxonomyGenerator(BaseAIService):
    """Generates a flavor taxonomy for a free-text category with an LLM."""

    def __init__(self, *args, **kwargs):
        """Initialize the generator."""
        super().__init__(*args, **kwargs)
        if "model_config" not in kwargs:
            self.model_config = self.model_config.model_copy(
                update={"max_tokens": TAXONOMY_MAX_TOKENS}
            )
        prompt_info = PromptRegistry.get_taxonomy_prompt()
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", prompt_info["system"]),
            ("user", prompt_info["template"]),
        ])

    async def generate(self, category_name: str) -> TaxonomyPayload:
        """Generate a taxonomy payload for ``category_name``.

        Raises:
            AIUnavailableError: If AI is disabled or not configured
            AIProviderError: If the provider call fails
            AITimeoutError: If the call exceeds the timeout
            AIResponseFormatError: If the response is not a valid taxonomy
        """
        if not self.is_available():
            raise AIUnavailableError("AI taxonomy generation is disabled or not configured")

        chain = self.prompt | self.llm
        message = await self._invoke(
            chain.ainvoke({
                "category_name": category_name,
                "base_templates": ", ".join(BASE_TEMPLATES),
            }),
            self.settings.ai_taxonomy_timeout_seconds,
        )
        parsed = self._parse_json(message)
        if not isinstance(parsed, dict):
            raise AIResponseFormatError("Taxonomy response is not a JSON object")

        base_template = str(parsed.get("base_template") or "other").strip().lower()
        if base_template not in BASE_TEMPLATES:
            base_template = "other"

        try:
            payload = TaxonomyPayload.model_validate({
                **parsed,
                "base_template": base_template,
                "ai_model": self.model_name,
                "generated_at": datetime.utcnow(),
            })
        except ValidationError as e:
            raise AIResponseFormatError(f"Invalid taxonomy payload: {e}") from e

        logger.info("Generated taxonomy for '%s' (base template: %s)", category_name, base_template)
        return payload
