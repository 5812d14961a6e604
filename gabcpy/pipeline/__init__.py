"""Pipeline entrypoints and result carriers."""

from gabcpy.pipeline.entrypoints import run_analyze, run_check, run_validate
from gabcpy.pipeline.results import AnalysisRunResult, CheckRunResult, ValidationRunResult

__all__ = [
    "AnalysisRunResult",
    "CheckRunResult",
    "ValidationRunResult",
    "run_analyze",
    "run_check",
    "run_validate",
]
