"""Analytics engines over a vault snapshot."""

from .activity import ActivityAnalyzer
from .calendar import TaskCalendarBuilder
from .flow import FlowEstimator
from .pipeline import PipelineReconstructor
from .review import ReviewCadenceScorer, health_score
from .tasks import TaskAnalyzer

__all__ = [
    "FlowEstimator",
    "PipelineReconstructor",
    "ReviewCadenceScorer",
    "TaskCalendarBuilder",
    "TaskAnalyzer",
    "ActivityAnalyzer",
    "health_score",
]
