"""
Normalization, matching and planning engines.

This package contains the engines that perform the core business logic of
the degree planner. All of them are synchronous and hold no state between
calls.
"""

from .normalizer import CourseNormalizer
from .matching import MatchingEngine
from .template_planner import TemplatePlanner, choose_template, normalize_provider_key

__all__ = [
    "CourseNormalizer",
    "MatchingEngine",
    "TemplatePlanner",
    "choose_template",
    "normalize_provider_key",
]
