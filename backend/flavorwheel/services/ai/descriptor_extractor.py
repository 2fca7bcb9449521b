"""AI descriptor extraction adapter."""

import json
import logging
import time
from typing import Any, Dict, List, Optional

from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field, ValidationError, field_validator

from flavorwheel.models.descriptor import CATEGORY_MAX_LENGTH, DescriptorType
from flavorwheel.schemas.descriptor import ExtractedDescriptor
from flavorwheel.schemas.taxonomy import TaxonomyPayload
from flavorwheel.services.ai.base import BaseAIService
from flavorwheel.services.ai.constants import DEFAULT_AI_CONFIDENCE, EXTRACTION_MAX_TOKENS
from flavorwheel.services.ai.prompts import PromptRegistry
from flavorwheel.services.categories import (
    FLAVOR_CATEGORIES,
    METAPHOR_CATEGORIES,
    categories_for_type,
    closest_category,
)
from flavorwheel.services.exceptions import AIResponseFormatError, AIUnavailableError

logger = logging.getLogger(__name__)


class AIDescriptor(BaseModel):
    """One descriptor as returned by the model."""

    text: str = Field(min_length=1, max_length=200)
    type: DescriptorType
    category: Optional[str] = None
    subcategory: Optional[str] = None
    confidence: float = Field(default=DEFAULT_AI_CONFIDENCE, ge=0.0, le=1.0)

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v):
        """Accept type labels in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class AIExtractionOutput(BaseModel):
    """Structured extraction output schema."""

    descriptors: List[AIDescriptor]


class AIExtractionResult(BaseModel):
    """Descriptors plus usage metadata for one AI call."""

    descriptors: List[ExtractedDescriptor]
    tokens_used: int
    processing_time_ms: int
    model: str
    prompt_version: str
    raw_response: Dict[str, Any]


def _clip_label(label: Optional[str]) -> Optional[str]:
    """Fit a free-form label into the category column."""
    if label is None:
        return None
    clipped = label.strip()[:CATEGORY_MAX_LENGTH].rstrip()
    return clipped or None


class AIDescriptorExtractor(BaseAIService):
    """Extracts typed, scored descriptors from tasting notes with an LLM."""

    def __init__(self, *args, **kwargs):
        """Initialize the extractor."""
        super().__init__(*args, **kwargs)
        if "model_config" not in kwargs:
            self.model_config = self.model_config.model_copy(
                update={"max_tokens": EXTRACTION_MAX_TOKENS}
            )
        self.setup_prompt()

    def setup_prompt(self):
        """Set up the prompt template."""
        prompt_info = PromptRegistry.get_descriptor_extraction_prompt()
        self.prompt_version = prompt_info["version"]
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", prompt_info["system"]),
            ("user", prompt_info["template"]),
        ])

    def _prompt_inputs(
        self,
        text: str,
        category: Optional[str],
        taxonomy: Optional[TaxonomyPayload],
    ) -> Dict[str, str]:
        category_context = f"Context: This is a tasting of {category}" if category else ""
        taxonomy_context = ""
        if taxonomy is not None:
            taxonomy_context = (
                "Expected aroma categories for this item: "
                f"{json.dumps(taxonomy.aroma_categories)}\n"
                "Expected flavor categories for this item: "
                f"{json.dumps(taxonomy.flavor_categories)}\n"
                "Typical descriptors: "
                f"{json.dumps(taxonomy.typical_descriptors)}"
            )
        return {
            "text": text,
            "category_context": category_context,
            "taxonomy_context": taxonomy_context,
            "flavor_categories": "\n".join(f"- {c.name}" for c in FLAVOR_CATEGORIES),
            "metaphor_categories": "\n".join(f"- {c.name}" for c in METAPHOR_CATEGORIES),
        }

    @staticmethod
    def _snap_category(descriptor: AIDescriptor) -> ExtractedDescriptor:
        """Map the model's category label onto the predefined catalog."""
        match = closest_category(descriptor.category, categories_for_type(descriptor.type.value))
        category = match.name if match else _clip_label(descriptor.category)
        return ExtractedDescriptor(
            text=descriptor.text.strip(),
            type=descriptor.type,
            category=category,
            subcategory=_clip_label(descriptor.subcategory),
            confidence=descriptor.confidence,
        )

    async def extract(
        self,
        text: str,
        category: Optional[str] = None,
        taxonomy: Optional[TaxonomyPayload] = None,
        *,
        timeout_seconds: float | None = None,
    ) -> AIExtractionResult:
        """Extract descriptors from a tasting note.

        Args:
            text: Combined tasting note text
            category: Optional item category for context
            taxonomy: Optional cached taxonomy for the category
            timeout_seconds: Override for the configured timeout

        Returns:
            AIExtractionResult with descriptors and usage metadata

        Raises:
            AIUnavailableError: If AI is disabled, unconfigured or text is empty
            AIProviderError: If the provider call fails
            AITimeoutError: If the call exceeds the timeout
            AIResponseFormatError: If the response has no valid payload
        """
        if not text or not text.strip():
            raise AIUnavailableError("AI extraction requires non-empty text")
        if not self.is_available():
            raise AIUnavailableError("AI extraction is disabled or not configured")

        timeout = (
            float(timeout_seconds)
            if timeout_seconds is not None
            else float(self.settings.ai_extraction_timeout_seconds)
        )
        start = time.perf_counter()

        chain = self.prompt | self.llm
        message = await self._invoke(
            chain.ainvoke(self._prompt_inputs(text, category, taxonomy)),
            timeout,
        )
        parsed = self._parse_json(message)

        # Some models return the bare array
        if isinstance(parsed, list):
            parsed = {"descriptors": parsed}
        try:
            output = AIExtractionOutput.model_validate(parsed)
        except ValidationError as e:
            raise AIResponseFormatError(
                f"Invalid descriptor payload: {e}", raw_text=self._message_text(message)
            ) from e

        descriptors = [
            self._snap_category(d) for d in output.descriptors if d.text.strip()
        ]
        processing_time_ms = int((time.perf_counter() - start) * 1000)
        tokens_used = self._tokens_used(message)

        logger.info(
            "AI extracted %s descriptors in %sms (%s tokens)",
            len(descriptors),
            processing_time_ms,
            tokens_used,
        )
        return AIExtractionResult(
            descriptors=descriptors,
            tokens_used=tokens_used,
            processing_time_ms=processing_time_ms,
            model=self.model_name,
            prompt_version=self.prompt_version,
            raw_response={"descriptors": [d.model_dump(mode="json") for d in output.descriptors]},
        )
