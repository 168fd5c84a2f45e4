"""Tax, housing and retirement computation engines."""

from hometax.engines.amortization import AmortizationSchedule
from hometax.engines.comparator import MultiJurisdictionComparator
from hometax.engines.deductions import DeductionResolver
from hometax.engines.evaluator import ScenarioEvaluator
from hometax.engines.phaseout import DeductionPhaseoutProjector
from hometax.engines.retirement import RetirementProjector

__all__ = [
    "AmortizationSchedule",
    "DeductionPhaseoutProjector",
    "DeductionResolver",
    "MultiJurisdictionComparator",
    "RetirementProjector",
    "ScenarioEvaluator",
]
