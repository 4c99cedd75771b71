"""Pipeline orchestration for replaying engagement submissions.

This module coordinates the offline evaluation workflow used for dispute
resolution and audits:
1. Load submissions from JSON
2. Evaluate each with the registry
3. Store reports as JSON
"""

import json
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path

from engagement_integrity.evaluators.registry import EvaluatorRegistry
from engagement_integrity.models.model_policy import FusionWeights
from engagement_integrity.models.model_result import EvaluationReport
from engagement_integrity.models.model_submission import EngagementSubmission

logger = logging.getLogger(__name__)


def load_submissions(path: Path | str) -> list[EngagementSubmission]:
    """Load one submission object or a list of them from a JSON file.

    Args:
        path: JSON file path.

    Returns:
        Parsed submissions, in file order.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or a submission is invalid
            (pydantic ValidationError is a ValueError).
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        msg = f"Expected a submission object or a list of them in {path}"
        raise ValueError(msg)

    submissions = [EngagementSubmission.model_validate(item) for item in data]
    logger.info(f"Loaded {len(submissions)} submissions from {path}")
    return submissions


def run_evaluation_pipeline(
    submissions: list[EngagementSubmission],
    weights: FusionWeights | None = None,
    current_time: datetime | None = None,
    registry: EvaluatorRegistry | None = None,
) -> list[EvaluationReport]:
    """Run evaluation for every submission.

    Args:
        submissions: Submissions to evaluate.
        weights: Fusion weights. Uses env overrides or defaults if None.
        current_time: Evaluation timestamp. Uses each submitted_at if None.
        registry: Registry to use. A default one is built if None.

    Returns:
        One report per submission, in input order.
    """
    logger.info(f"Starting evaluation of {len(submissions)} submissions")
    registry = registry or EvaluatorRegistry(weights=weights)

    reports = registry.evaluate_batch(submissions, current_time)

    verdicts = Counter(report.decision.verdict.value for report in reports)
    summary = ", ".join(f"{verdict}={count}" for verdict, count in sorted(verdicts.items()))
    logger.info(f"Evaluation complete: {summary or 'no submissions'}")
    return reports


def save_reports(reports: list[EvaluationReport], path: Path | str) -> Path:
    """Write reports as a JSON list.

    Args:
        reports: Reports to write.
        path: Output file path. Parent directories are created.

    Returns:
        The path written to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    data = [report.model_dump(mode="json") for report in reports]
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    logger.info(f"Saved {len(reports)} reports to {path}")
    return path
