"""Pytest configuration and fixtures."""

import os

import pytest

from intervention_engine.core.intervention_catalog import InterventionCatalog, load_default_catalog


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["OPENAI_API_KEY"] = "test-openai-key"
    os.environ["ENGINE_ENV"] = "test"


@pytest.fixture
def catalog() -> InterventionCatalog:
    """Fresh copy of the bundled reference catalog."""
    return load_default_catalog()


@pytest.fixture
def draft_payload() -> dict:
    """A week of aggregated events for one student, with insights and a partial plan."""
    return {
        "dataset": {
            "studentName": "Jordan",
            "studentId": "stu-42",
            "from": "2024-01-01",
            "to": "2024-01-08",
            "totalEvents": 20,
            "totalDurationSeconds": 540,
            "bySeverity": {"low": 14, "medium": 5, "high": 1},
            "byType": {"Out of Seat": 12, "Calling Out": 8},
        },
        "insights": {
            "hypothesis": "Escape from non-preferred tasks",
            "rankedFunctions": [
                {"name": "escape", "share": 0.6},
                {"name": "attention", "share": 0.3},
                {"name": "sensory", "share": 0.1},
            ],
            "severityShare": {"low": 0.7, "medium": 0.25, "high": 0.05},
            "antecedentCounts": {"transition": 9, "independent work": 7},
            "consequenceCounts": {"redirect": 11},
        },
        "plan": {
            "antecedent": [{"title": "Visual schedule", "rationale": "Predictability"}],
            "teaching": [{"title": "rehearse with feedback", "rationale": "dup"}],
            "consequence": [],
            "reinforcement": [{"title": "Token Economy with clear exchange rates"}],
        },
    }


@pytest.fixture
def catalog_rows(catalog):
    """Build storage-shaped rows for the catalog, attaching embeddings by id."""

    def _rows(vectors: dict[str, list[float]] | None = None) -> list[dict]:
        vectors = vectors or {}
        rows = []
        for item in catalog:
            row = item.model_dump(mode="json")
            if item.id in vectors:
                row["embedding"] = vectors[item.id]
            rows.append(row)
        return rows

    return _rows
