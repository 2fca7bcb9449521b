"""Category taxonomy API router."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flavorwheel.database import get_db
from flavorwheel.llm import ModelFactory
from flavorwheel.schemas.taxonomy import TaxonomyRequest, TaxonomyResponse
from flavorwheel.services.ai.base import get_model_factory
from flavorwheel.services.ai.taxonomy_generator import AITaxonomyGenerator
from flavorwheel.services.taxonomy_resolver import TaxonomyResolver

router = APIRouter()


@router.post("/categories/get-or-create-taxonomy", response_model=TaxonomyResponse)
async def get_or_create_taxonomy(
    payload: TaxonomyRequest,
    db: Session = Depends(get_db),
    factory: ModelFactory = Depends(get_model_factory),
):
    """Return the cached taxonomy for a category, generating it on first use."""
    resolver = TaxonomyResolver(db, AITaxonomyGenerator(factory=factory))
    try:
        resolved = await resolver.resolve(
            payload.category_name, force_regenerate=payload.force_regenerate
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to resolve taxonomy: {str(e)}")

    return TaxonomyResponse(
        category_name=resolved.category_name,
        normalized_name=resolved.normalized_name,
        taxonomy=resolved.taxonomy,
        cached=resolved.cached,
        usage_count=resolved.usage_count,
    )
