"""
Tests for the batch pipeline and the classify-agent-type handler.
"""

from agent_advisor.classification.tool_handler import ClassifyAgentTypeHandler
from agent_advisor.pipeline import AgentAdvisorPipeline
from agent_advisor.schemas.questions import InterviewStage


# ═══════════════════════════════════════════════════════════════
# PIPELINE
# ═══════════════════════════════════════════════════════════════

class TestPipeline:

    def test_full_answers_succeed(self, full_answers):
        result = AgentAdvisorPipeline().run(dict(full_answers))

        assert result.success
        assert result.errors == []
        assert result.warnings == []
        assert result.recommendation.agent_type == "data-analyst"
        assert result.requirements.capabilities.tool_integrations == ["PostgreSQL", "Slack"]
        assert result.session.current_stage == InterviewStage.COMPLETE

    def test_to_dict(self, full_answers):
        data = AgentAdvisorPipeline().run(dict(full_answers)).to_dict()
        assert data["success"] is True
        assert data["requirements"]["name"] == "Sales Data Analyzer"
        assert data["recommendation"]["estimated_complexity"] == "medium"

    def test_missing_name_fails(self, full_answers):
        responses = dict(full_answers)
        del responses["q1_agent_name"]

        result = AgentAdvisorPipeline().run(responses)

        assert not result.success
        assert result.recommendation is None
        assert result.errors[0] == "Failed to extract valid requirements from responses"
        assert any(e.startswith("name:") for e in result.errors[1:])

    def test_invalid_answer_is_recorded_and_warned(self, full_answers):
        responses = dict(full_answers)
        responses["q4_interaction_style"] = "chatty"

        result = AgentAdvisorPipeline().run(responses)

        assert not result.success
        assert result.requirements.interaction_style == "chatty"
        assert len(result.warnings) == 1
        assert result.warnings[0].startswith("q4_interaction_style: ")
        assert any(e.startswith("interaction_style:") for e in result.errors)

    def test_unknown_question_warns_but_succeeds(self, full_answers):
        responses = dict(full_answers)
        responses["q99_extra"] = "hello"

        result = AgentAdvisorPipeline().run(responses)

        assert result.success
        assert result.warnings == ["q99_extra: Response references unknown question ID: q99_extra"]

    def test_empty_responses(self):
        result = AgentAdvisorPipeline().run({})
        assert not result.success
        assert result.to_dict()["recommendation"] is None


# ═══════════════════════════════════════════════════════════════
# CLASSIFY HANDLER
# ═══════════════════════════════════════════════════════════════

class TestClassifyHandler:

    def test_success(self, sales_requirements):
        result = ClassifyAgentTypeHandler().handle(sales_requirements)

        assert result["status"] == "success"
        assert result["classification"]["selected_template"] == "data-analyst"
        assert result["classification"]["confidence"] == 79
        assert result["recommendation"]["template_name"] == "Data Analyst Agent"
        assert [a["template_id"] for a in result["alternatives"]] == [
            "code-assistant", "automation-agent", "content-creator",
        ]
        assert len(result["next_steps"]) == 4
        assert result["notes"].startswith("Selected data-analyst template")

    def test_without_alternatives(self, sales_requirements):
        result = ClassifyAgentTypeHandler().handle(sales_requirements, include_alternatives=False)
        assert result["alternatives"] == []

    def test_missing_requirements(self):
        result = ClassifyAgentTypeHandler().handle(None)
        assert result["status"] == "error"
        assert result["code"] == "MISSING_REQUIREMENTS"

    def test_invalid_requirements(self, sales_requirements):
        sales_requirements["capabilities"]["memory"] = "infinite"
        result = ClassifyAgentTypeHandler().handle(sales_requirements)
        assert result["code"] == "INVALID_REQUIREMENTS"
        assert any(e.startswith("capabilities.memory:") for e in result["details"]["errors"])

    def test_not_a_mapping(self):
        result = ClassifyAgentTypeHandler().handle(["not", "requirements"])
        assert result["code"] == "INVALID_REQUIREMENTS"
