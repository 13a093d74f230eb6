"""
Template registry: the fixed catalog of agent templates scored by the classifier.
"""

from .registry import (
    DEFAULT_TEMPLATES,
    Template,
    TemplateRegistry,
    ToolConfiguration,
    default_registry,
    load_default_registry,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "Template",
    "TemplateRegistry",
    "ToolConfiguration",
    "default_registry",
    "load_default_registry",
]
