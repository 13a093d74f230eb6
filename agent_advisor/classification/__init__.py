"""
Classification engine: template scoring and recommendation assembly.
"""

from .classifier import (
    AgentClassifier,
    Complexity,
    Recommendation,
    ServiceSuggestion,
    TemplateScore,
)
from .tool_handler import ClassifyAgentTypeHandler

__all__ = [
    "AgentClassifier",
    "Complexity",
    "Recommendation",
    "ServiceSuggestion",
    "TemplateScore",
    "ClassifyAgentTypeHandler",
]
