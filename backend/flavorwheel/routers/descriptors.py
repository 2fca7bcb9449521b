"""Descriptor extraction API router."""
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flavorwheel.database import get_db
from flavorwheel.llm import ModelFactory
from flavorwheel.models.descriptor import Descriptor, DescriptorType
from flavorwheel.schemas.descriptor import DescriptorRead, ExtractRequest, ExtractResponse
from flavorwheel.services.ai.base import get_model_factory
from flavorwheel.services.ai.descriptor_extractor import AIDescriptorExtractor
from flavorwheel.services.ai.taxonomy_generator import AITaxonomyGenerator
from flavorwheel.services.exceptions import ExtractionValidationError
from flavorwheel.services.extraction import AIExtractionStrategy, ExtractionOrchestrator
from flavorwheel.services.taxonomy_resolver import TaxonomyResolver

router = APIRouter()


@router.post("/flavor-wheels/extract-descriptors", response_model=ExtractResponse)
async def extract_descriptors(
    payload: ExtractRequest,
    db: Session = Depends(get_db),
    factory: ModelFactory = Depends(get_model_factory),
):
    """Extract descriptors from tasting notes and save them."""
    orchestrator = ExtractionOrchestrator(
        db,
        ai_strategy=AIExtractionStrategy(AIDescriptorExtractor(factory=factory)),
        taxonomy_resolver=TaxonomyResolver(db, AITaxonomyGenerator(factory=factory)),
    )
    try:
        return await orchestrator.extract(payload)
    except ExtractionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to save descriptors: {str(e)}")


@router.get("/flavor-wheels/descriptors", response_model=list[DescriptorRead])
def list_descriptors(
    user_id: str = Query(..., min_length=1),
    descriptor_type: DescriptorType | None = None,
    limit: int = Query(default=100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """List a user's descriptors, newest first."""
    query = db.query(Descriptor).filter(Descriptor.user_id == user_id)
    if descriptor_type is not None:
        query = query.filter(Descriptor.descriptor_type == descriptor_type)
    return query.order_by(Descriptor.updated_at.desc(), Descriptor.id.desc()).limit(limit).all()
