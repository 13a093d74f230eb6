"""
Agent Advisor

Interviews a user about the agent they want, accumulates the answers into
structured requirements, and recommends the best-fitting agent template.
"""

__version__ = "0.1.0"

from .classification import AgentClassifier, ClassifyAgentTypeHandler, Recommendation, TemplateScore
from .interview import InterviewStateManager, InterviewToolHandler, SessionStore
from .pipeline import AgentAdvisorPipeline, PipelineResult
from .schemas import AgentRequirements, QUESTION_CATALOG
from .templates import TemplateRegistry, default_registry

__all__ = [
    "__version__",
    "AgentClassifier",
    "ClassifyAgentTypeHandler",
    "Recommendation",
    "TemplateScore",
    "InterviewStateManager",
    "InterviewToolHandler",
    "SessionStore",
    "AgentAdvisorPipeline",
    "PipelineResult",
    "AgentRequirements",
    "QUESTION_CATALOG",
    "TemplateRegistry",
    "default_registry",
]
