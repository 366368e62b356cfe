"""Curate-then-evaluate loop over a material list."""

from typing import Callable, Iterable, Optional

from ..exceptions import EngineError
from ..logging_config import logger
from ..material import Material
from .models import EvaluateOutcome, EvaluationReport, MaterialResult
from .protocol import Curator, Policy


def _checked_material(curated: object, hook: str) -> Material:
    if not isinstance(curated, Material):
        raise EngineError(f"{hook} returned {type(curated).__name__}, expected Material")
    problems = curated.type_errors()
    if problems:
        raise EngineError(f"{hook} left material '{curated.name}' invalid: {'; '.join(problems)}")
    return curated


def evaluate_materials(
    materials: Iterable[Material],
    curator: Curator,
    policy: Policy,
    on_result: Optional[Callable[[MaterialResult], None]] = None,
) -> EvaluationReport:
    """
    Curate and evaluate every material, strictly in order.

    For each material the curator runs first; the policy then receives a copy
    of the curated material together with a fresh outcome. The curated
    material (not the policy's copy) is what the report records.

    Args:
        materials: Materials in source order
        curator: Curation step
        policy: Policy step
        on_result: Called with each MaterialResult as soon as it is recorded

    Returns:
        EvaluationReport with one result per material

    Raises:
        EngineError: If a hook fails. The run stops and no report is returned.
    """
    report = EvaluationReport()

    for material in materials:
        curated = _checked_material(curator.curate(material), "curation")

        outcome = policy.evaluate(curated.copy())
        if not isinstance(outcome, EvaluateOutcome):
            raise EngineError(f"policy returned {type(outcome).__name__}, expected EvaluateOutcome")

        result = report.add(curated, outcome)
        logger.debug(
            f"Evaluated {curated.name} {curated.version or ''}: success={outcome.success} "
            f"errors={len(outcome.errors)} warnings={len(outcome.warnings)}"
        )
        if on_result is not None:
            on_result(result)

    logger.info(f"Evaluated {len(report)} material(s), {len(report.failed)} failed")
    return report
