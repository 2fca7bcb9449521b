"""Descriptor extraction orchestration.

Chooses between AI and keyword extraction, persists the resulting
descriptors with an idempotent upsert and logs every AI attempt.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from flavorwheel.config import Settings, settings as default_settings
from flavorwheel.models.descriptor import Descriptor, normalize_descriptor
from flavorwheel.models.extraction_log import ExtractionLog
from flavorwheel.schemas.descriptor import (
    ExtractedDescriptor,
    ExtractRequest,
    ExtractResponse,
    StructuredNotes,
)
from flavorwheel.schemas.taxonomy import TaxonomyPayload
from flavorwheel.services.ai.descriptor_extractor import AIDescriptorExtractor
from flavorwheel.services.exceptions import (
    AIResponseFormatError,
    AIUnavailableError,
    ExtractionValidationError,
)
from flavorwheel.services.keywords import (
    extract_descriptors_with_intensity,
    extract_from_structured,
)
from flavorwheel.services.taxonomy_resolver import TaxonomyResolver
from flavorwheel.services.upsert import upsert_rows

logger = logging.getLogger(__name__)

DESCRIPTOR_KEY = ("user_id", "normalized_form", "descriptor_type")

# Columns overwritten when a descriptor key is extracted again
DESCRIPTOR_UPDATE_COLUMNS = (
    "source_type",
    "source_id",
    "descriptor_text",
    "category",
    "subcategory",
    "confidence_score",
    "intensity",
    "item_name",
    "item_category",
    "ai_extracted",
    "extraction_model",
    "updated_at",
)


@dataclass
class ExtractionInput:
    """Text to extract from plus the context an AI strategy may use."""

    text: str
    structured: Optional[StructuredNotes] = None
    category: Optional[str] = None
    taxonomy: Optional[TaxonomyPayload] = None


@dataclass
class ExtractionOutcome:
    descriptors: list[ExtractedDescriptor]
    method: str
    tokens_used: Optional[int] = None
    processing_time_ms: Optional[int] = None
    model: Optional[str] = None
    prompt_version: Optional[str] = None
    raw_response: dict = field(default_factory=dict)


class ExtractionStrategy(ABC):
    """One way of turning tasting notes into descriptors."""

    method: str

    @abstractmethod
    def is_applicable(self, data: ExtractionInput) -> bool:
        pass

    @abstractmethod
    async def extract(self, data: ExtractionInput) -> ExtractionOutcome:
        pass


class KeywordExtractionStrategy(ExtractionStrategy):
    """Lexicon matching; always applicable and never raises."""

    method = "keyword"

    def is_applicable(self, data: ExtractionInput) -> bool:
        return True

    async def extract(self, data: ExtractionInput) -> ExtractionOutcome:
        if data.structured is not None:
            descriptors = extract_from_structured(data.structured)
        else:
            descriptors = extract_descriptors_with_intensity(data.text)
        return ExtractionOutcome(descriptors=descriptors, method=self.method)


class AIExtractionStrategy(ExtractionStrategy):
    """LLM extraction through AIDescriptorExtractor."""

    method = "ai"

    def __init__(self, extractor: AIDescriptorExtractor):
        self.extractor = extractor

    def is_applicable(self, data: ExtractionInput) -> bool:
        return bool(data.text.strip()) and self.extractor.is_available()

    async def extract(self, data: ExtractionInput) -> ExtractionOutcome:
        result = await self.extractor.extract(data.text, data.category, data.taxonomy)
        return ExtractionOutcome(
            descriptors=result.descriptors,
            method=self.method,
            tokens_used=result.tokens_used,
            processing_time_ms=result.processing_time_ms,
            model=result.model,
            prompt_version=result.prompt_version,
            raw_response=result.raw_response,
        )


class ExtractionOrchestrator:
    """Runs an extraction request end to end."""

    def __init__(
        self,
        db: Session,
        ai_strategy: Optional[AIExtractionStrategy] = None,
        keyword_strategy: Optional[KeywordExtractionStrategy] = None,
        taxonomy_resolver: Optional[TaxonomyResolver] = None,
        app_settings: Settings = default_settings,
    ):
        self.db = db
        self.ai_strategy = ai_strategy
        self.keyword_strategy = keyword_strategy or KeywordExtractionStrategy()
        self.taxonomy_resolver = taxonomy_resolver
        self.settings = app_settings

    @staticmethod
    def validate(request: ExtractRequest) -> None:
        """Reject requests that cannot be extracted.

        Raises:
            ExtractionValidationError: If identifiers or input are missing
        """
        missing = [
            name
            for name, value in (
                ("user_id", request.user_id),
                ("source_type", request.source_type),
                ("source_id", request.source_id),
            )
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ExtractionValidationError(f"Missing required fields: {', '.join(missing)}")
        if not request.text and request.structured_data is None:
            raise ExtractionValidationError("Either text or structured_data must be provided")

    @staticmethod
    def combined_text(request: ExtractRequest) -> str:
        if request.text:
            return request.text
        if request.structured_data is not None:
            return request.structured_data.combined_text()
        return ""

    async def extract(self, request: ExtractRequest) -> ExtractResponse:
        """Extract, persist and summarize descriptors for one source.

        Args:
            request: Extraction request

        Returns:
            ExtractResponse with the descriptors and the number of rows saved

        Raises:
            ExtractionValidationError: If the request is invalid
        """
        self.validate(request)

        data = ExtractionInput(
            text=self.combined_text(request),
            structured=None if request.text else request.structured_data,
            category=request.category,
        )

        outcome = None
        if request.use_ai and self.ai_strategy is not None and self.ai_strategy.is_applicable(data):
            outcome = await self._try_ai(request, data)
        if outcome is None:
            outcome = await self.keyword_strategy.extract(data)

        saved_count = self._save(request, outcome) if outcome.descriptors else 0
        return ExtractResponse(
            success=True,
            descriptors=outcome.descriptors,
            saved_count=saved_count,
            extraction_method=outcome.method,
            tokens_used=outcome.tokens_used,
            processing_time_ms=outcome.processing_time_ms,
        )

    async def _try_ai(self, request: ExtractRequest, data: ExtractionInput) -> Optional[ExtractionOutcome]:
        """Run the AI strategy; None means fall back to keywords."""
        if request.category and self.taxonomy_resolver is not None:
            try:
                data.taxonomy = (await self.taxonomy_resolver.resolve(request.category)).taxonomy
            except ValueError:
                data.taxonomy = None

        try:
            outcome = await self.ai_strategy.extract(data)
        except AIUnavailableError as e:
            logger.info("AI extraction unavailable, using keywords: %s", e)
            return None
        except Exception as e:
            logger.warning("AI extraction failed, falling back to keyword: %s", e)
            raw_response = None
            if isinstance(e, AIResponseFormatError) and e.raw_text is not None:
                raw_response = {"raw_text": e.raw_text}
            self._log_attempt(request, data, success=False, error=str(e), raw_response=raw_response)
            return None

        self._log_attempt(request, data, success=True, outcome=outcome)
        return outcome

    def _log_attempt(
        self,
        request: ExtractRequest,
        data: ExtractionInput,
        success: bool,
        outcome: Optional[ExtractionOutcome] = None,
        error: Optional[str] = None,
        raw_response: Optional[dict] = None,
    ) -> None:
        extractor = self.ai_strategy.extractor
        log = ExtractionLog(
            user_id=request.user_id,
            tasting_id=request.source_id,
            source_type=request.source_type.value,
            input_text=data.text[: self.settings.descriptor_log_text_limit],
            input_category=request.category,
            model_used=outcome.model if outcome else extractor.model_name,
            prompt_version=outcome.prompt_version if outcome else extractor.prompt_version,
            tokens_used=outcome.tokens_used if outcome else None,
            processing_time_ms=outcome.processing_time_ms if outcome else None,
            descriptors_extracted=len(outcome.descriptors) if outcome else 0,
            extraction_successful=success,
            error_message=error,
            raw_ai_response=outcome.raw_response if outcome else raw_response,
        )
        self.db.add(log)
        self.db.commit()

    def _save(self, request: ExtractRequest, outcome: ExtractionOutcome) -> int:
        """Upsert descriptor rows; the last row for a repeated key wins."""
        item = request.item_context
        now = datetime.utcnow()
        records: dict[tuple, dict] = {}
        for descriptor in outcome.descriptors:
            normalized = normalize_descriptor(descriptor.text)
            if not normalized:
                continue
            records[(request.user_id, normalized, descriptor.type)] = {
                "user_id": request.user_id,
                "source_type": request.source_type,
                "source_id": request.source_id,
                "descriptor_text": descriptor.text,
                "normalized_form": normalized,
                "descriptor_type": descriptor.type,
                "category": descriptor.category,
                "subcategory": descriptor.subcategory,
                "confidence_score": descriptor.confidence,
                "intensity": descriptor.intensity,
                "item_name": item.item_name if item else None,
                "item_category": item.item_category if item else None,
                "ai_extracted": outcome.method == "ai",
                "extraction_model": outcome.model if outcome.method == "ai" else None,
                "created_at": now,
                "updated_at": now,
            }

        saved = upsert_rows(
            self.db,
            Descriptor,
            list(records.values()),
            conflict_columns=DESCRIPTOR_KEY,
            update_columns=DESCRIPTOR_UPDATE_COLUMNS,
        )
        self.db.commit()
        logger.info(
            "Saved %s descriptors for %s %s (%s)",
            saved,
            request.source_type.value,
            request.source_id,
            outcome.method,
        )
        return saved
