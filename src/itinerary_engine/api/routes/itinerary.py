"""Itinerary optimization and timeline endpoints."""

from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException, status

from ...schemas.itinerary import (
    ConflictModel,
    OptimizationReportModel,
    OptimizeRequest,
    TimelineModel,
    TimelineRequest,
)
from ...services.outputs.formatter import (
    activities_from_models,
    report_to_model,
    settings_from_model,
    timeline_to_model,
    vehicle_from_model,
)
from ...services.planner.cache import ReportCache, fingerprint
from ...services.planner.service import build_timeline, find_conflicts, optimize

router = APIRouter(prefix="/itinerary", tags=["itinerary"])

logger = logging.getLogger(__name__)

report_cache: ReportCache[OptimizationReportModel] = ReportCache()


@router.post("/optimize", response_model=OptimizationReportModel, status_code=status.HTTP_200_OK)
def optimize_itinerary(payload: OptimizeRequest) -> OptimizationReportModel:
    try:
        activities = activities_from_models(payload.activities)
        settings = settings_from_model(payload.settings)
        vehicle = vehicle_from_model(payload.vehicle_config)
        key = fingerprint(activities, settings, vehicle)
        return report_cache.get_or_compute(
            key, lambda: report_to_model(optimize(activities, settings, vehicle))
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing itinerary: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize itinerary: {str(exc)}",
        ) from exc


@router.post("/timeline", response_model=TimelineModel, status_code=status.HTTP_200_OK)
def itinerary_timeline(payload: TimelineRequest) -> TimelineModel:
    """Day-by-day view of the itinerary as stored, with travel metrics."""
    try:
        activities = activities_from_models(payload.activities)
        timeline = build_timeline(activities, vehicle_from_model(payload.vehicle_config))
        return timeline_to_model(timeline)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error building timeline: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to build timeline: {str(exc)}",
        ) from exc


@router.post("/conflicts", response_model=List[ConflictModel], status_code=status.HTTP_200_OK)
def itinerary_conflicts(payload: TimelineRequest) -> List[ConflictModel]:
    try:
        activities = activities_from_models(payload.activities)
        return [
            ConflictModel(
                date=record.date,
                first_id=record.first_id,
                second_id=record.second_id,
                overlap_minutes=record.overlap_minutes,
            )
            for record in find_conflicts(activities)
        ]
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error detecting conflicts: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to detect conflicts: {str(exc)}",
        ) from exc
