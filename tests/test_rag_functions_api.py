"""Tests for the rag-index, rag-search and vectorize-data function routes."""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from app.main import app

client = TestClient(app)

EMBEDDING = [0.1] * 1536


def test_rag_index_stores_document():
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        with patch("app.db.rag_docs.insert_rag_doc", return_value=17) as mock_insert:
            mock_embed.return_value = EMBEDDING

            response = client.post(
                "/functions/v1/rag-index",
                json={
                    "userId": "user-1",
                    "kind": "journal",
                    "refId": "entry-1",
                    "title": "Monday",
                    "content": "Felt rested",
                    "metadata": {"area": "Mental"},
                },
            )

    assert response.status_code == 200
    assert response.json() == {"ok": True, "id": 17}
    mock_embed.assert_awaited_once_with("Felt rested")
    kwargs = mock_insert.call_args[1]
    assert kwargs["user_id"] == "user-1"
    assert kwargs["kind"] == "journal"
    assert kwargs["ref_id"] == "entry-1"
    assert kwargs["embedding"] == EMBEDDING
    assert kwargs["metadata"] == {"area": "Mental"}


def test_rag_index_missing_fields_returns_500_error():
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        response = client.post("/functions/v1/rag-index", json={"userId": "user-1", "kind": "journal"})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing required fields: userId, kind, content"}
    mock_embed.assert_not_called()


def test_rag_index_embedding_failure_maps_to_error_body():
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        mock_embed.side_effect = RuntimeError("OpenAI API error: 429")

        response = client.post(
            "/functions/v1/rag-index",
            json={"userId": "user-1", "kind": "journal", "content": "text"},
        )

    assert response.status_code == 500
    assert response.json()["error"] == "OpenAI API error: 429"


def test_rag_search_returns_matches():
    match = {
        "id": 3,
        "kind": "journal",
        "title": "Monday",
        "content": "Felt rested",
        "metadata": {},
        "created_at": "2025-09-22T09:00:00+00:00",
        "score": 0.83,
    }
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        with patch("app.db.rag_docs.match_rag_docs", return_value=[match]) as mock_match:
            mock_embed.return_value = EMBEDDING

            response = client.post(
                "/functions/v1/rag-search",
                json={"userId": "user-1", "query": "sleep", "kinds": ["journal"]},
            )

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]["id"] == 3
    assert data[0]["score"] == 0.83
    kwargs = mock_match.call_args[1]
    assert kwargs["kinds"] == ["journal"]
    assert kwargs["k"] == 8


def test_rag_search_null_metadata_becomes_empty():
    match = {"id": 4, "kind": "goal_digest", "content": "Ship v1", "metadata": None, "score": 0.5}
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        with patch("app.db.rag_docs.match_rag_docs", return_value=[match]):
            mock_embed.return_value = EMBEDDING

            response = client.post(
                "/functions/v1/rag-search", json={"userId": "user-1", "query": "goals"}
            )

    assert response.status_code == 200
    assert response.json()[0]["metadata"] == {}


def test_rag_search_requires_query():
    response = client.post("/functions/v1/rag-search", json={"userId": "user-1"})

    assert response.status_code == 500
    assert "Missing required fields" in response.json()["error"]


def test_vectorize_contacts_upserts_per_contact():
    contacts = [
        {"id": "c-1", "name": "Ann", "company": "Acme", "segment": "TOP5"},
        {"id": "c-2", "name": "Bob"},
    ]
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        with patch("app.db.contacts.list_contacts", return_value=contacts):
            with patch("app.db.rag_docs.find_rag_doc_id", side_effect=[5, None]):
                with patch("app.db.rag_docs.update_rag_doc") as mock_update:
                    with patch("app.db.rag_docs.insert_rag_doc", return_value=6) as mock_insert:
                        mock_embed.return_value = EMBEDDING

                        response = client.post(
                            "/functions/v1/vectorize-data",
                            json={"userId": "user-1", "action": "vectorize_contacts"},
                        )

    assert response.status_code == 200
    assert response.json() == {"type": "contacts", "processed": 2, "total": 2}
    assert mock_update.call_args[0][0] == 5
    assert mock_update.call_args[0][1]["content"] == "Ann Acme"
    assert mock_insert.call_args[1]["kind"] == "contact_note"
    assert mock_insert.call_args[1]["ref_id"] == "c-2"


def test_vectorize_data_skips_invalid_items():
    items = [
        {"id": "g-1", "date": "2025-09-22", "title": "Ship v1", "done": False},
        {"id": "g-2", "title": "missing date"},
    ]
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        with patch("app.db.rag_docs.find_rag_doc_id", return_value=None):
            with patch("app.db.rag_docs.insert_rag_doc", return_value=9) as mock_insert:
                mock_embed.return_value = EMBEDDING

                response = client.post(
                    "/functions/v1/vectorize-data",
                    json={
                        "userId": "user-1",
                        "action": "vectorize_data",
                        "dataType": "goal",
                        "data": items,
                    },
                )

    assert response.status_code == 200
    assert response.json() == {"type": "goal", "processed": 1, "total": 2}
    assert mock_insert.call_args[1]["kind"] == "goal_digest"
    assert mock_insert.call_args[1]["content"] == "Goal for 2025-09-22: Ship v1. Status: open."


def test_vectorize_data_accepts_timestamped_records():
    items = [{"id": "g-1", "date": "2025-09-22T14:23:11.123Z", "title": "Ship v1", "done": False}]
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        with patch("app.db.rag_docs.find_rag_doc_id", return_value=None):
            with patch("app.db.rag_docs.insert_rag_doc", return_value=9) as mock_insert:
                mock_embed.return_value = EMBEDDING

                response = client.post(
                    "/functions/v1/vectorize-data",
                    json={
                        "userId": "user-1",
                        "action": "vectorize_data",
                        "dataType": "goal",
                        "data": items,
                    },
                )

    assert response.status_code == 200
    assert response.json() == {"type": "goal", "processed": 1, "total": 1}
    assert mock_insert.call_args[1]["content"] == "Goal for 2025-09-22: Ship v1. Status: open."


def test_vectorize_data_empty_batch():
    with patch("app.core.rag_indexing.embed_text_async", new_callable=AsyncMock) as mock_embed:
        response = client.post(
            "/functions/v1/vectorize-data",
            json={"userId": "user-1", "action": "vectorize_data", "dataType": "goal", "data": []},
        )

    assert response.status_code == 200
    assert response.json() == {"type": "goal", "processed": 0, "total": 0}
    mock_embed.assert_not_called()


def test_vectorize_data_invalid_action():
    response = client.post("/functions/v1/vectorize-data", json={"userId": "user-1", "action": "nope"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid action"}


def test_vectorize_data_unknown_type_is_error():
    response = client.post(
        "/functions/v1/vectorize-data",
        json={"userId": "user-1", "action": "vectorize_data", "dataType": "recipes", "data": [{"id": 1}]},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Unsupported data type: recipes"}
