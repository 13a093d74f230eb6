"""
Shared sample data for the agent advisor tests.
"""

import copy

import pytest

from agent_advisor.interview.persistence import SessionStore


# Every catalog question answered in catalog order
FULL_ANSWERS = [
    ("q1_agent_name", "Sales Data Analyzer"),
    ("q2_primary_outcome", "Generate weekly sales reports with statistical analysis"),
    ("q3_target_audience", ["Sales managers", "Analysts"]),
    ("q4_interaction_style", "task-focused"),
    ("q5_delivery_channels", ["CLI", "API"]),
    ("q6_success_metrics", ["Report accuracy", "Time saved"]),
    ("q7_memory_needs", "short-term"),
    ("q8_file_access", True),
    ("q9_web_access", False),
    ("q10_code_execution", False),
    ("q11_data_analysis", True),
    ("q12_tool_integrations", "PostgreSQL, Slack"),
    ("q13_runtime_preference", "cloud"),
    ("q14_constraints", "No PII storage, Budget under $500/month"),
    ("q15_additional_notes", "Reports go out every Monday"),
]

# The same agent as a complete requirements mapping
SALES_ANALYZER_REQUIREMENTS = {
    "name": "Sales Data Analyzer",
    "description": "Sales Data Analyzer agent",
    "primary_outcome": "Generate weekly sales reports with statistical analysis",
    "target_audience": ["Sales managers", "Analysts"],
    "interaction_style": "task-focused",
    "delivery_channels": ["CLI", "API"],
    "success_metrics": ["Report accuracy", "Time saved"],
    "constraints": ["No PII storage", "Budget under $500/month"],
    "capabilities": {
        "memory": "short-term",
        "file_access": True,
        "web_access": False,
        "code_execution": False,
        "data_analysis": True,
        "tool_integrations": ["PostgreSQL", "Slack"],
    },
    "environment": {"runtime": "cloud"},
    "additional_notes": "Reports go out every Monday",
}


@pytest.fixture
def store(tmp_path):
    return SessionStore(tmp_path / "sessions")


@pytest.fixture
def full_answers():
    return list(FULL_ANSWERS)


@pytest.fixture
def sales_requirements():
    return copy.deepcopy(SALES_ANALYZER_REQUIREMENTS)
