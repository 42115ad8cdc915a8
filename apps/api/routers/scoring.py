from typing import Any, Dict

from fastapi import APIRouter, Body

from domain.models import ScoreResult
from services.scoring.credit_score import compute_credit_score

router = APIRouter(prefix="/api", tags=["scoring"])


@router.post("/credit-score", response_model=ScoreResult)
def score_profile(profile: Dict[str, Any] = Body(...)):  # noqa: B008
    """
    Score an ad-hoc business profile. Fields are coerced, never rejected:
    a bad monthlyRevenue simply counts as zero.
    """
    return compute_credit_score(profile)
