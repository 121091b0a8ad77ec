import json
import logging
from typing import Any, Dict, List, Optional

from mise_recipes.app.schemas.ingestion import (
    IngestionAttemptResult,
    IngestionErrorCode,
    IngestionStage,
    RecipeIngestionCandidate,
)

logger = logging.getLogger(__name__)


def build_diagnostics_payload(
    source_url: str,
    source_host: str,
    attempts: List[IngestionAttemptResult],
    quality_score: int,
    stage_used: Optional[IngestionStage] = None,
    failure_reason: Optional[IngestionErrorCode] = None,
    selected: Optional[RecipeIngestionCandidate] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "sourceUrl": source_url,
        "sourceHost": source_host,
        "stageUsed": stage_used.value if stage_used else None,
        "resultQualityScore": quality_score,
        "failureReason": failure_reason.value if failure_reason else None,
        "attempts": [
            {
                "stage": attempt.stage.value,
                "success": attempt.success,
                "latencyMs": attempt.latency_ms,
                "errorCode": attempt.error_code.value if attempt.error_code else None,
                "ingredients": len(attempt.ingredients),
                "instructions": len(attempt.instructions),
            }
            for attempt in attempts
        ],
    }
    if selected is not None:
        payload["selected"] = {
            "stage": selected.stage.value,
            "title": selected.title,
            "ingredients": len(selected.ingredients),
            "instructions": len(selected.instructions),
        }
    return payload


def log_ingestion_diagnostics(payload: Dict[str, Any]) -> None:
    """Emit the single structured record for an ingestion run."""
    logger.info("[recipe-ingestion] %s", json.dumps(payload, separators=(",", ":")))
