"""
Agent Classifier - scores requirements against the template registry.

Scoring (summed, never clamped):
1. Capability tags: +8 per required capability the template declares
2. Use-case alignment: +15 per matching ideal-for phrase, counted up to two
3. Interaction style: +15 when the template suits the requested style
4. Capability support: +5 each for file, web and data support the agent needs

classify() takes the best template and builds the full Recommendation:
services, customized prompt, complexity tier, implementation steps, notes.

Usage:
    classifier = AgentClassifier()
    recommendation = classifier.classify(requirements)
    print(recommendation.agent_type, recommendation.score.score)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..errors import TemplateNotFoundError
from ..schemas.requirements import AgentCapabilities, AgentRequirements
from ..templates.registry import Template, TemplateRegistry, ToolConfiguration, default_registry


logger = logging.getLogger(__name__)


# Templates considered canonically suited to each interaction style.
# A style missing from this map is compatible with every template.
INTERACTION_STYLE_MAP: dict[str, list[str]] = {
    "conversational": ["content-creator", "research-agent"],
    "task-focused": ["data-analyst", "code-assistant", "automation-agent"],
    "collaborative": ["code-assistant", "content-creator"],
}

# (substrings of the primary outcome, capability tags they imply)
OUTCOME_KEYWORDS: list[tuple[tuple[str, ...], tuple[str, ...]]] = [
    (("data", "analys"), ("data-processing",)),
    (("content", "writ"), ("content-creation",)),
    (("code", "develop"), ("code-review",)),
    (("research", "search"), ("research", "web-search")),
    (("automat", "workflow"), ("automation",)),
]

CAPABILITY_TAG_POINTS = 8
USE_CASE_POINTS = 15
USE_CASE_MAX_MATCHES = 2
INTERACTION_STYLE_POINTS = 15
CAPABILITY_SUPPORT_POINTS = 5
ALTERNATIVE_NOTE_THRESHOLD = 50


class Complexity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class TemplateScore:
    template_id: str
    score: float
    matched_capabilities: list[str] = field(default_factory=list)
    missing_capabilities: list[str] = field(default_factory=list)
    reasoning: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "template_id": self.template_id,
            "score": self.score,
            "matched_capabilities": list(self.matched_capabilities),
            "missing_capabilities": list(self.missing_capabilities),
            "reasoning": self.reasoning,
        }


@dataclass
class ServiceSuggestion:
    """External tool server the agent should be wired to."""
    name: str
    description: str
    url: str
    authentication: str = "none"

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "description": self.description,
            "url": self.url,
            "authentication": self.authentication,
        }


@dataclass
class Recommendation:
    """Everything downstream generators need to build the recommended agent."""
    agent_type: str
    template_name: str
    required_dependencies: list[str]
    services: list[ServiceSuggestion]
    system_prompt: str
    tool_configurations: list[ToolConfiguration]
    estimated_complexity: Complexity
    implementation_steps: list[str]
    notes: str
    score: TemplateScore
    alternatives: list[TemplateScore] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "agent_type": self.agent_type,
            "template_name": self.template_name,
            "required_dependencies": list(self.required_dependencies),
            "services": [s.to_dict() for s in self.services],
            "system_prompt": self.system_prompt,
            "tool_configurations": [t.to_dict() for t in self.tool_configurations],
            "estimated_complexity": self.estimated_complexity.value,
            "implementation_steps": list(self.implementation_steps),
            "notes": self.notes,
            "score": self.score.to_dict(),
            "alternatives": [a.to_dict() for a in self.alternatives],
        }


def _capabilities(requirements: AgentRequirements) -> AgentCapabilities:
    return requirements.capabilities or AgentCapabilities()


class AgentClassifier:
    """Scores templates and assembles recommendations. Holds no per-call state."""

    def __init__(self, registry: Optional[TemplateRegistry] = None):
        self.registry = registry or default_registry()

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def score_all_templates(self, requirements: AgentRequirements) -> list[TemplateScore]:
        """Score every template, best first. Ties keep registry order."""
        scores = [self.score_template(t, requirements) for t in self.registry.list_all()]
        return sorted(scores, key=lambda s: -s.score)

    def score_template(self, template: Template, requirements: AgentRequirements) -> TemplateScore:
        score = 0
        matched: list[str] = []
        missing: list[str] = []
        reasons: list[str] = []

        # Capability tags
        for capability in self._extract_required_capabilities(requirements):
            if capability in template.capability_tags:
                matched.append(capability)
                score += CAPABILITY_TAG_POINTS
            else:
                missing.append(capability)

        # Use-case alignment; a missing outcome reads as "" and matches every phrase
        outcome = (requirements.primary_outcome or "").lower()
        use_cases = [
            use_case for use_case in template.ideal_for
            if use_case.lower() in outcome or outcome in use_case.lower()
        ]
        if use_cases:
            score += USE_CASE_POINTS * min(len(use_cases), USE_CASE_MAX_MATCHES)
            reasons.append(f"Matches use cases: {', '.join(use_cases)}")

        # Interaction style
        if self._matches_interaction_style(template, requirements.interaction_style):
            score += INTERACTION_STYLE_POINTS
            reasons.append(f"Compatible with {requirements.interaction_style or 'any'} interaction style")

        # Capability support
        support_score, support_reasons = self._score_capability_requirements(template, _capabilities(requirements))
        score += support_score
        reasons.extend(support_reasons)

        return TemplateScore(
            template_id=template.id,
            score=score,
            matched_capabilities=matched,
            missing_capabilities=missing,
            reasoning=self._build_reasoning_summary(matched, missing, reasons),
        )

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def classify(self, requirements: AgentRequirements) -> Recommendation:
        """
        Pick the best template and build its recommendation.

        Raises TemplateNotFoundError if the winning id does not resolve in the
        registry.
        """
        scores = self.score_all_templates(requirements)
        best = scores[0]
        template = self.registry.get(best.template_id)
        if template is None:
            raise TemplateNotFoundError(best.template_id)

        complexity = self.assess_complexity(requirements, template)
        alternatives = scores[1:3]

        logger.info(
            "Classified %s as %s (score %s, complexity %s)",
            requirements.name or "agent", template.id, best.score, complexity.value,
        )

        return Recommendation(
            agent_type=template.id,
            template_name=template.name,
            required_dependencies=list(template.required_dependencies),
            services=self.generate_services(requirements, template),
            system_prompt=self.customize_system_prompt(template, requirements),
            tool_configurations=list(template.default_tools),
            estimated_complexity=complexity,
            implementation_steps=self.generate_implementation_steps(requirements, template, complexity),
            notes=self._generate_notes(best, alternatives, requirements),
            score=best,
            alternatives=alternatives,
        )

    def generate_services(self, requirements: AgentRequirements, template: Template) -> list[ServiceSuggestion]:
        caps = _capabilities(requirements)
        services = []

        if caps.web_access:
            services.append(ServiceSuggestion(
                name="web-fetch",
                description="Web content fetching and scraping capabilities",
                url="https://github.com/anthropics/mcp-server-fetch",
            ))
        if caps.file_access:
            services.append(ServiceSuggestion(
                name="filesystem",
                description="Local filesystem read/write operations",
                url="https://github.com/anthropics/mcp-server-filesystem",
            ))
        if template.id == "data-analyst" or caps.data_analysis:
            services.append(ServiceSuggestion(
                name="data-tools",
                description="Statistical analysis and data processing utilities",
                url="https://github.com/anthropics/mcp-server-everything",
            ))
        if caps.memory == "long-term":
            services.append(ServiceSuggestion(
                name="memory",
                description="Persistent memory and context management",
                url="https://github.com/anthropics/mcp-server-memory",
            ))

        return services

    def customize_system_prompt(self, template: Template, requirements: AgentRequirements) -> str:
        """Template prompt wrapped in sections derived from the requirements."""
        prompt = f"# {requirements.name or template.name}\n\n{requirements.description or template.description}\n\n{template.system_prompt}"

        if requirements.target_audience:
            prompt += f"\n\n## Target Audience\nYou are designed to serve: {', '.join(requirements.target_audience)}"

        if requirements.primary_outcome:
            prompt += f"\n\n## Primary Objective\n{requirements.primary_outcome}"

        if requirements.success_metrics:
            metrics = "\n".join(f"- {m}" for m in requirements.success_metrics)
            prompt += f"\n\n## Success Metrics\nMeasure success by:\n{metrics}"

        if requirements.constraints:
            constraints = "\n".join(f"- {c}" for c in requirements.constraints)
            prompt += f"\n\n## Constraints\n{constraints}"

        if requirements.interaction_style:
            prompt += f"\n\n## Interaction Style\nMaintain a {requirements.interaction_style} approach in all interactions."

        return prompt

    def assess_complexity(self, requirements: AgentRequirements, template: Template) -> Complexity:
        points = 0

        tool_count = len(template.default_tools)
        if tool_count > 6:
            points += 2
        elif tool_count > 3:
            points += 1

        caps = _capabilities(requirements)
        if caps.web_access:
            points += 1
        if caps.file_access:
            points += 1
        if caps.code_execution:
            points += 2
        if caps.data_analysis:
            points += 1
        if caps.memory == "long-term":
            points += 2
        elif caps.memory == "short-term":
            points += 1

        integrations = len(caps.tool_integrations or [])
        if integrations > 3:
            points += 2
        elif integrations > 0:
            points += 1

        if len(requirements.delivery_channels or []) > 2:
            points += 1

        environment = requirements.environment
        if environment is not None:
            if environment.runtime == "hybrid":
                points += 2
            if environment.compliance_requirements:
                points += 2

        if points <= 3:
            return Complexity.LOW
        if points <= 7:
            return Complexity.MEDIUM
        return Complexity.HIGH

    def generate_implementation_steps(
        self,
        requirements: AgentRequirements,
        template: Template,
        complexity: Complexity,
    ) -> list[str]:
        tools = template.default_tools
        steps = [
            "Initialize project structure and install dependencies",
            f"Configure {template.name} template with {len(tools)} core tools",
            "Set up model provider integration and credentials",
        ]

        if tools:
            names = ", ".join(t.name for t in tools[:3])
            more = ", ..." if len(tools) > 3 else ""
            steps.append(f"Implement {len(tools)} tool handlers: {names}{more}")

        caps = _capabilities(requirements)
        if caps.file_access:
            steps.append("Configure filesystem access and file operation handlers")
        if caps.web_access:
            steps.append("Set up web fetching and content extraction capabilities")
        if caps.data_analysis:
            steps.append("Implement data processing and analysis utilities")
        if caps.memory != "none":
            steps.append(f"Configure {caps.memory} memory management system")

        integrations = caps.tool_integrations or []
        if integrations:
            more = ", ..." if len(integrations) > 3 else ""
            steps.append(f"Integrate with external services: {', '.join(integrations[:3])}{more}")

        steps.append("Create test suite for tool validation and error handling")
        steps.append("Configure environment variables and deployment settings")

        if complexity == Complexity.HIGH:
            steps.append("Implement comprehensive error recovery and fallback strategies")
            steps.append("Set up monitoring and performance optimization")

        steps.append("Document API usage and deployment instructions")
        return steps

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _generate_notes(
        self,
        best: TemplateScore,
        alternatives: list[TemplateScore],
        requirements: AgentRequirements,
    ) -> str:
        notes = [f"Selected {best.template_id} template with {best.score:.0f}% confidence."]

        if best.missing_capabilities:
            notes.append(
                f"Note: Template does not natively support: {', '.join(best.missing_capabilities)}. "
                "These may require custom implementation."
            )

        if alternatives and alternatives[0].score > ALTERNATIVE_NOTE_THRESHOLD:
            listed = ", ".join(f"{a.template_id} ({a.score:.0f}%)" for a in alternatives)
            notes.append(f"Alternative options: {listed}")

        if requirements.additional_notes:
            notes.append(f"Additional context: {requirements.additional_notes}")

        return "\n".join(notes)

    @staticmethod
    def _extract_required_capabilities(requirements: AgentRequirements) -> list[str]:
        """Capability tags implied by the flags and the primary outcome, de-duplicated in order."""
        caps = _capabilities(requirements)
        capabilities: list[str] = []

        if caps.file_access:
            capabilities.append("file-access")
        if caps.web_access:
            capabilities.append("web-access")
        if caps.data_analysis:
            capabilities.extend(["data-processing", "statistics"])
        if caps.code_execution:
            capabilities.extend(["code-review", "testing"])

        outcome = (requirements.primary_outcome or "").lower()
        for keywords, tags in OUTCOME_KEYWORDS:
            if any(k in outcome for k in keywords):
                capabilities.extend(tags)

        return list(dict.fromkeys(capabilities))

    @staticmethod
    def _matches_interaction_style(template: Template, style: Optional[str]) -> bool:
        suited = INTERACTION_STYLE_MAP.get(style or "")
        if suited is None:
            return True
        return template.id in suited

    @staticmethod
    def _score_capability_requirements(template: Template, caps: AgentCapabilities) -> tuple[int, list[str]]:
        score = 0
        reasons = []

        if caps.file_access and "file-access" in template.capability_tags:
            score += CAPABILITY_SUPPORT_POINTS
            reasons.append("Supports file access")
        if caps.web_access and "web-access" in template.capability_tags:
            score += CAPABILITY_SUPPORT_POINTS
            reasons.append("Supports web access")
        if caps.data_analysis and "data-processing" in template.capability_tags:
            score += CAPABILITY_SUPPORT_POINTS
            reasons.append("Supports data analysis")

        return score, reasons

    @staticmethod
    def _build_reasoning_summary(matched: list[str], missing: list[str], reasons: list[str]) -> str:
        parts = []
        if matched:
            parts.append(f"Matched capabilities: {', '.join(matched)}")
        if missing:
            parts.append(f"Missing capabilities: {', '.join(missing)}")
        parts.extend(reasons)
        return ". ".join(parts) or "Basic template match"
