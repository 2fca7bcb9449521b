"""Flavor wheel API router."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flavorwheel.database import get_db
from flavorwheel.schemas.wheel import GenerateWheelRequest, GenerateWheelResponse
from flavorwheel.services.exceptions import WheelScopeError
from flavorwheel.services.wheel_generator import WheelGenerator

router = APIRouter()


@router.post("/flavor-wheels/generate", response_model=GenerateWheelResponse)
def generate_wheel(payload: GenerateWheelRequest, db: Session = Depends(get_db)):
    """Return a cached flavor wheel, or aggregate and cache a new one."""
    try:
        result = WheelGenerator(db).generate(
            payload.wheel_type,
            payload.scope_type,
            payload.scope_filter,
            force_regenerate=payload.force_regenerate,
        )
    except WheelScopeError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=f"Failed to generate flavor wheel: {str(e)}")

    return GenerateWheelResponse(
        wheel_data=result.wheel_data,
        wheel_id=result.wheel_id,
        cached=result.cached,
        warning=result.warning,
    )
