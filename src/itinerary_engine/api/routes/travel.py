"""Travel method comparison endpoint."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...schemas.itinerary import TravelComparisonModel, TravelCompareRequest
from ...services.outputs.formatter import activity_from_model, comparison_to_model
from ...services.travel.estimator import GeoTravelEstimator

router = APIRouter(prefix="/travel", tags=["travel"])


@router.post("/compare", response_model=TravelComparisonModel, status_code=status.HTTP_200_OK)
def compare_travel(payload: TravelCompareRequest) -> TravelComparisonModel:
    origin = activity_from_model(payload.origin)
    destination = activity_from_model(payload.destination)
    if origin.id == destination.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Origin and destination must be different activities.",
        )
    comparison = GeoTravelEstimator().compare_travel_methods(origin, destination)
    if comparison is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Both activities need coordinates to compare travel methods.",
        )
    return comparison_to_model(comparison)
