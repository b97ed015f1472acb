"""Tests for chunked upserts with mocked Supabase."""

from unittest.mock import MagicMock, patch

import pytest

from intervention_engine.core.exceptions import BatchWriteError
from intervention_engine.db.batch_writer import ChunkedWriter


def _rows(count: int) -> list[dict]:
    return [{"id": f"row-{i}", "embedding": [0.1]} for i in range(count)]


@pytest.fixture
def mock_supabase():
    with patch("intervention_engine.db.batch_writer.get_supabase") as mock_get:
        client = MagicMock()
        mock_get.return_value = client
        yield client


def test_write_commits_one_upsert_per_chunk(mock_supabase):
    result = ChunkedWriter("interventions", chunk_size=400).write(_rows(950))

    upsert = mock_supabase.table.return_value.upsert
    assert upsert.call_count == 3
    sizes = [len(call.args[0]) for call in upsert.call_args_list]
    assert sizes == [400, 400, 150]
    assert upsert.call_args_list[0].kwargs == {"on_conflict": "id"}
    assert result.written == 950
    assert result.chunks_committed == 3


def test_chunk_size_defaults_to_setting(mock_supabase):
    writer = ChunkedWriter("interventions")
    assert writer.chunk_size == 400


def test_empty_write_is_a_no_op(mock_supabase):
    result = ChunkedWriter("interventions", chunk_size=10).write([])

    assert result.written == 0
    assert result.chunks_committed == 0
    mock_supabase.table.return_value.upsert.assert_not_called()


def test_failed_chunk_reports_committed_rows(mock_supabase):
    execute = mock_supabase.table.return_value.upsert.return_value.execute
    execute.side_effect = [MagicMock(), Exception("connection reset")]

    with pytest.raises(BatchWriteError) as exc_info:
        ChunkedWriter("interventions", chunk_size=2).write(_rows(5))

    assert exc_info.value.committed == 2
    assert "connection reset" in str(exc_info.value)


def test_rejects_non_positive_chunk_size():
    with pytest.raises(ValueError):
        ChunkedWriter("interventions", chunk_size=0)
