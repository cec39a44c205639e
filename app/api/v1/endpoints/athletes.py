"""
Athlete endpoints: training load (ACWR), match eligibility and wellness summary.
"""

import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_monitoring_service, get_wellness_service
from app.core.thresholds import WELLNESS_SUMMARY_DAYS
from app.schemas.eligibility import EligibilityResult
from app.schemas.load import LoadResult
from app.schemas.wellness import AthleteWellnessSummary
from app.services.monitoring_service import MonitoringService
from app.services.wellness_service import WellnessService

router = APIRouter()


@router.get("/{athlete_id}/load", summary="Get acute/chronic load and ACWR zone.", response_model=LoadResult, )
def get_load(athlete_id: int,
             as_of: Optional[datetime.date] = Query(None, description="Reference date (defaults to today)"),
             service: MonitoringService = Depends(get_monitoring_service), ):
    return service.compute_load(athlete_id, as_of)


@router.get("/{athlete_id}/eligibility", summary="Get category and match eligibility.",
            response_model=EligibilityResult, )
def get_eligibility(athlete_id: int,
                    as_of: Optional[datetime.date] = Query(None, description="Reference date (defaults to today)"),
                    service: MonitoringService = Depends(get_monitoring_service), ):
    return service.compute_eligibility(athlete_id, as_of)


@router.get("/{athlete_id}/wellness-summary", summary="Get trailing wellness averages and response counts.",
            response_model=AthleteWellnessSummary, )
def get_wellness_summary(athlete_id: int,
                         days: int = Query(WELLNESS_SUMMARY_DAYS, ge=1, le=365, description="Trailing period"),
                         service: WellnessService = Depends(get_wellness_service), ):
    return service.athlete_summary(athlete_id, days)
