"""
Tests for template scoring and recommendation assembly.
"""

import pytest

from agent_advisor.classification.classifier import AgentClassifier, Complexity
from agent_advisor.errors import TemplateNotFoundError
from agent_advisor.schemas.requirements import AgentCapabilities, AgentEnvironment, AgentRequirements
from agent_advisor.templates.registry import DEFAULT_TEMPLATES, TemplateRegistry


def _requirements(**overrides):
    fields = dict(
        name="Sales Data Analyzer",
        description="Sales Data Analyzer agent",
        primary_outcome="Generate weekly sales reports with statistical analysis",
        target_audience=["Sales managers", "Analysts"],
        interaction_style="task-focused",
        delivery_channels=["CLI", "API"],
        success_metrics=["Report accuracy", "Time saved"],
        constraints=["No PII storage", "Budget under $500/month"],
        capabilities=AgentCapabilities(
            memory="short-term",
            file_access=True,
            data_analysis=True,
            tool_integrations=["PostgreSQL", "Slack"],
        ),
        environment=AgentEnvironment(runtime="cloud"),
        additional_notes="Reports go out every Monday",
    )
    fields.update(overrides)
    return AgentRequirements(**fields)


def _template_entry(template_id, tags, ideal_for=(), tools=4):
    return {
        "id": template_id,
        "name": template_id.title(),
        "capability_tags": list(tags),
        "ideal_for": list(ideal_for),
        "system_prompt": "You help.",
        "default_tools": [{"name": f"tool_{i}"} for i in range(tools)],
        "required_dependencies": ["pydantic"],
    }


@pytest.fixture
def classifier():
    return AgentClassifier()


# ═══════════════════════════════════════════════════════════════
# SCORING
# ═══════════════════════════════════════════════════════════════

class TestScoring:

    def test_sales_analyzer_classifies_as_data_analyst(self, classifier):
        recommendation = classifier.classify(_requirements())
        assert recommendation.agent_type == "data-analyst"
        assert recommendation.score.score > 70

    def test_data_analyst_score_breakdown(self, classifier):
        template = classifier.registry.get("data-analyst")
        score = classifier.score_template(template, _requirements())
        # 3 tags x 8 + 2 use cases x 15 + style 15 + file/data support 10
        assert score.score == 79
        assert score.matched_capabilities == ["file-access", "data-processing", "statistics"]
        assert score.missing_capabilities == []
        assert "Matches use cases: statistical analysis, sales reports" in score.reasoning

    def test_scores_every_template_sorted(self, classifier):
        scores = classifier.score_all_templates(_requirements())
        assert len(scores) == len(classifier.registry)
        values = [s.score for s in scores]
        assert values == sorted(values, reverse=True)

    def test_first_score_matches_classification(self, classifier):
        requirements = _requirements(primary_outcome="Research competitors and summarize the web")
        scores = classifier.score_all_templates(requirements)
        recommendation = classifier.classify(requirements)
        assert recommendation.agent_type == scores[0].template_id
        assert recommendation.score.score == scores[0].score

    def test_scoring_is_pure(self, classifier):
        template = classifier.registry.get("research-agent")
        requirements = _requirements()
        first = classifier.score_template(template, requirements)
        second = classifier.score_template(template, requirements)
        assert first == second

    def test_ties_keep_registry_order(self):
        registry = TemplateRegistry.from_list([
            _template_entry("alpha", ["automation"]),
            _template_entry("beta", ["automation"]),
            _template_entry("gamma", ["automation"]),
        ])
        scores = AgentClassifier(registry).score_all_templates(_requirements())
        assert [s.template_id for s in scores] == ["alpha", "beta", "gamma"]

    def test_tag_score_not_capped(self):
        tags = ["file-access", "web-access", "data-processing", "statistics", "code-review", "testing"]
        registry = TemplateRegistry.from_list([_template_entry("everything", tags)])
        requirements = _requirements(
            primary_outcome="x",
            interaction_style=None,
            capabilities=AgentCapabilities(file_access=True, web_access=True, data_analysis=True, code_execution=True),
        )
        score = AgentClassifier(registry).score_template(registry.get("everything"), requirements)
        assert len(score.matched_capabilities) == 6
        # 48 from tags, 15 style, 15 support
        assert score.score == 78

    def test_outcome_keywords_add_capabilities(self, classifier):
        requirements = _requirements(
            primary_outcome="Automate the research workflow",
            capabilities=AgentCapabilities(),
        )
        template = classifier.registry.get("research-agent")
        score = classifier.score_template(template, requirements)
        assert score.matched_capabilities == ["research", "web-search"]
        assert score.missing_capabilities == ["automation"]

    def test_use_case_match_is_bidirectional(self):
        registry = TemplateRegistry.from_list([
            _template_entry("reports", [], ideal_for=["Weekly sales reports with forecasting"]),
        ])
        requirements = _requirements(
            primary_outcome="sales reports", interaction_style=None, capabilities=AgentCapabilities()
        )
        score = AgentClassifier(registry).score_template(registry.get("reports"), requirements)
        assert score.score == 15 + 15

    def test_use_case_count_capped_at_two(self):
        registry = TemplateRegistry.from_list([
            _template_entry("many", [], ideal_for=["sales", "reports", "weekly"]),
        ])
        requirements = _requirements(
            primary_outcome="weekly sales reports", interaction_style=None, capabilities=AgentCapabilities()
        )
        score = AgentClassifier(registry).score_template(registry.get("many"), requirements)
        assert score.score == 30 + 15
        assert "sales, reports, weekly" in score.reasoning

    def test_unknown_style_is_compatible(self, classifier):
        template = classifier.registry.get("content-creator")
        requirements = _requirements(interaction_style="whimsical", capabilities=AgentCapabilities(), primary_outcome="qqq")
        assert classifier.score_template(template, requirements).score == 15

    def test_style_mismatch_scores_nothing(self, classifier):
        template = classifier.registry.get("content-creator")
        requirements = _requirements(capabilities=AgentCapabilities(), primary_outcome="qqq")
        score = classifier.score_template(template, requirements)
        assert score.score == 0
        assert score.reasoning == "Basic template match"

    def test_partial_requirements_tolerated(self, classifier):
        scores = classifier.score_all_templates(AgentRequirements(name="Half done"))
        assert len(scores) == 5
        # 30 for use cases (an empty outcome is contained in every phrase) + 15 style
        assert all(s.score == 45 for s in scores)
        assert [s.template_id for s in scores] == [t.id for t in classifier.registry.list_all()]

    def test_missing_outcome_matches_every_phrase(self, classifier):
        template = classifier.registry.get("research-agent")
        score = classifier.score_template(template, AgentRequirements(name="Half done"))
        assert score.reasoning.startswith("Matches use cases: " + ", ".join(template.ideal_for))

    def test_blank_outcome_scored_like_missing(self, classifier):
        template = classifier.registry.get("automation-agent")
        blank = classifier.score_template(template, AgentRequirements(primary_outcome=""))
        missing = classifier.score_template(template, AgentRequirements())
        assert blank == missing
        assert blank.score == 45


# ═══════════════════════════════════════════════════════════════
# REGISTRY CONSISTENCY
# ═══════════════════════════════════════════════════════════════

class _ForgetfulRegistry(TemplateRegistry):
    """Scores templates but cannot resolve them afterwards."""

    def get(self, template_id):
        return None


class TestRegistryConsistency:

    def test_missing_winner_is_fatal(self):
        classifier = AgentClassifier(_ForgetfulRegistry.from_json(DEFAULT_TEMPLATES))
        with pytest.raises(TemplateNotFoundError, match="Template data-analyst not found"):
            classifier.classify(_requirements())


# ═══════════════════════════════════════════════════════════════
# RECOMMENDATION
# ═══════════════════════════════════════════════════════════════

class TestRecommendation:

    def test_services(self, classifier):
        recommendation = classifier.classify(_requirements())
        assert [s.name for s in recommendation.services] == ["filesystem", "data-tools"]
        assert all(s.authentication == "none" for s in recommendation.services)

    def test_services_for_web_and_long_term_memory(self, classifier):
        requirements = _requirements(capabilities=AgentCapabilities(web_access=True, memory="long-term"))
        template = classifier.registry.get("research-agent")
        services = classifier.generate_services(requirements, template)
        assert [s.name for s in services] == ["web-fetch", "memory"]
        assert services[0].url == "https://github.com/anthropics/mcp-server-fetch"

    def test_data_analyst_always_gets_data_tools(self, classifier):
        template = classifier.registry.get("data-analyst")
        services = classifier.generate_services(_requirements(capabilities=AgentCapabilities()), template)
        assert [s.name for s in services] == ["data-tools"]

    def test_system_prompt_sections(self, classifier):
        template = classifier.registry.get("data-analyst")
        prompt = classifier.customize_system_prompt(template, _requirements())

        assert prompt.startswith("# Sales Data Analyzer\n\nSales Data Analyzer agent\n\n" + template.system_prompt)
        assert "\n\n## Target Audience\nYou are designed to serve: Sales managers, Analysts" in prompt
        assert "\n\n## Primary Objective\nGenerate weekly sales reports with statistical analysis" in prompt
        assert "\n\n## Success Metrics\nMeasure success by:\n- Report accuracy\n- Time saved" in prompt
        assert "\n\n## Constraints\n- No PII storage\n- Budget under $500/month" in prompt
        assert prompt.endswith("\n\n## Interaction Style\nMaintain a task-focused approach in all interactions.")

    def test_system_prompt_omits_empty_sections(self, classifier):
        template = classifier.registry.get("data-analyst")
        prompt = classifier.customize_system_prompt(template, _requirements(constraints=None, target_audience=[]))
        assert "## Constraints" not in prompt
        assert "## Target Audience" not in prompt

    def test_implementation_steps(self, classifier):
        recommendation = classifier.classify(_requirements())
        steps = recommendation.implementation_steps

        assert steps[1] == "Configure Data Analyst Agent template with 4 core tools"
        assert steps[3] == "Implement 4 tool handlers: read_csv, analyze_data, generate_visualization, ..."
        assert "Configure filesystem access and file operation handlers" in steps
        assert "Configure short-term memory management system" in steps
        assert "Integrate with external services: PostgreSQL, Slack" in steps
        assert "Set up web fetching and content extraction capabilities" not in steps
        assert steps[-1] == "Document API usage and deployment instructions"

    def test_notes(self, classifier):
        recommendation = classifier.classify(_requirements())
        assert recommendation.notes == (
            "Selected data-analyst template with 79% confidence.\n"
            "Additional context: Reports go out every Monday"
        )

    def test_notes_flag_missing_capabilities(self, classifier):
        requirements = _requirements(
            primary_outcome="Automated code review and quality checks",
            interaction_style="collaborative",
            capabilities=AgentCapabilities(code_execution=True, web_access=True),
            additional_notes=None,
        )
        recommendation = classifier.classify(requirements)
        assert recommendation.agent_type == "code-assistant"
        assert "Note: Template does not natively support: web-access" in recommendation.notes
        assert recommendation.alternatives == classifier.score_all_templates(requirements)[1:3]

    def test_notes_list_strong_alternatives(self):
        tags = ["file-access", "data-processing", "statistics"]
        registry = TemplateRegistry.from_list([
            _template_entry("alpha", tags, ideal_for=["sales reports"]),
            _template_entry("beta", tags, ideal_for=["sales reports"]),
        ])
        recommendation = AgentClassifier(registry).classify(
            _requirements(interaction_style=None, additional_notes=None)
        )
        # 24 tags + 15 use case + 15 style + 10 support
        assert recommendation.score.score == 64
        assert recommendation.notes.splitlines()[-1] == "Alternative options: beta (64%)"

    def test_to_dict(self, classifier):
        data = classifier.classify(_requirements()).to_dict()
        assert data["agent_type"] == "data-analyst"
        assert data["estimated_complexity"] == "medium"
        assert data["tool_configurations"][0]["name"] == "read_csv"
        assert data["score"]["score"] == 79
        assert len(data["alternatives"]) == 2


# ═══════════════════════════════════════════════════════════════
# COMPLEXITY
# ═══════════════════════════════════════════════════════════════

class TestComplexity:

    def test_low(self, classifier):
        template = classifier.registry.get("content-creator")
        requirements = _requirements(capabilities=AgentCapabilities(), delivery_channels=["Web"])
        assert classifier.assess_complexity(requirements, template) == Complexity.LOW

    def test_medium(self, classifier):
        template = classifier.registry.get("data-analyst")
        # tools 1 + file 1 + data 1 + short-term 1 + integrations 1
        assert classifier.assess_complexity(_requirements(), template) == Complexity.MEDIUM

    def test_high_adds_steps(self, classifier):
        requirements = _requirements(
            delivery_channels=["CLI", "API", "Slack"],
            capabilities=AgentCapabilities(
                memory="long-term",
                file_access=True,
                web_access=True,
                code_execution=True,
                data_analysis=True,
                tool_integrations=["GitHub", "Jira", "Slack", "PagerDuty"],
            ),
            environment=AgentEnvironment(runtime="hybrid", compliance_requirements=["SOC2"]),
        )
        recommendation = AgentClassifier().classify(requirements)
        assert recommendation.estimated_complexity == Complexity.HIGH
        steps = recommendation.implementation_steps
        assert steps[-3:] == [
            "Implement comprehensive error recovery and fallback strategies",
            "Set up monitoring and performance optimization",
            "Document API usage and deployment instructions",
        ]
        assert "Integrate with external services: GitHub, Jira, Slack, ..." in steps

    def test_boundaries(self, classifier):
        template = classifier.registry.get("content-creator")
        # tools 1 + code 2 = 3
        three = _requirements(capabilities=AgentCapabilities(code_execution=True), delivery_channels=[])
        assert classifier.assess_complexity(three, template) == Complexity.LOW
        # tools 1 + code 2 + long-term 2 + hybrid 2 = 7
        seven = _requirements(
            capabilities=AgentCapabilities(code_execution=True, memory="long-term"),
            delivery_channels=[],
            environment=AgentEnvironment(runtime="hybrid"),
        )
        assert classifier.assess_complexity(seven, template) == Complexity.MEDIUM
