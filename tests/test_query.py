"""Tests for the query router."""

from unittest.mock import MagicMock

import pytest

from moviemodeling.service.database.store import Page
from moviemodeling.service.errors import InvalidInputError, StoreUnavailableError
from moviemodeling.service.modeling.query import QueryRouter, resolve_model
from moviemodeling.service.modeling.seeding import Seeder

BASE_URL = "https://media.example.com"


@pytest.fixture
def seeded_store(fake_store, make_movie):
    Seeder(fake_store, BASE_URL).seed([make_movie("m1", "Dune", actors=[("7", "Zed")])])
    fake_store.calls.clear()
    return fake_store


class TestResolveModel:
    """Tests for resolve_model function."""

    @pytest.mark.parametrize("name", ["Single", "single", "HYBRID", " Reference "])
    def test_case_insensitive(self, name):
        assert resolve_model(name).lower() == name.strip().lower()

    @pytest.mark.parametrize("name", ["Bogus", "", None])
    def test_rejects_unknown(self, name):
        with pytest.raises(InvalidInputError):
            resolve_model(name)


class TestValidation:
    """Invalid requests never reach the store."""

    def test_invalid_model_makes_no_store_call(self, fake_store):
        with pytest.raises(InvalidInputError):
            QueryRouter(fake_store).query("Bogus", "Dune", doc_id="m1")

        assert fake_store.calls == []

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_empty_search_value_rejected(self, fake_store, value):
        with pytest.raises(InvalidInputError):
            QueryRouter(fake_store).query("Single", value)

        assert fake_store.calls == []


class TestPointRead:
    """Tests for point reads (doc id supplied)."""

    def test_point_read_returns_single_document(self, seeded_store):
        response = QueryRouter(seeded_store).query("Single", "Dune", doc_id="m1")

        assert response is not None
        assert len(response.results) == 1
        assert response.results[0]["id"] == "m1"
        diagnostics = response.diagnostics
        assert diagnostics.query_type == "Point Read"
        assert diagnostics.data_model == "Single"
        assert diagnostics.submitted_search_value == "Dune"
        assert diagnostics.formatted_search_value == "dune"
        assert diagnostics.doc_id == "m1"
        assert diagnostics.query_text is None
        assert diagnostics.request_charge == "1.00"
        assert diagnostics.activity_id == "op-read"
        assert seeded_store.calls == [("get_by_key", "Single", "m1", "dune")]

    def test_model_name_normalized_to_collection(self, seeded_store):
        response = QueryRouter(seeded_store).query("single", "DUNE", doc_id="m1")

        assert response.diagnostics.data_model == "Single"

    def test_point_read_person_document(self, seeded_store):
        response = QueryRouter(seeded_store).query("Embedded", "Zed", doc_id="movm1act7")

        assert response.results[0]["movie_id"] == "m1"

    def test_point_read_miss_returns_none(self, seeded_store):
        assert QueryRouter(seeded_store).query("Single", "Dune", doc_id="nope") is None

    def test_point_read_wrong_partition_returns_none(self, seeded_store):
        assert QueryRouter(seeded_store).query("Single", "Arrival", doc_id="m1") is None


class TestFilteredQuery:
    """Tests for filtered (SQL) queries."""

    def test_title_query(self, seeded_store):
        response = QueryRouter(seeded_store).query("Hybrid", "Dune")

        assert response.diagnostics.query_type == "SQL Query"
        assert response.diagnostics.query_text == "from 'Hybrid' where title = $title"
        assert response.diagnostics.doc_id is None
        assert [doc["id"] for doc in response.results] == ["m1"]
        assert seeded_store.calls == [
            ("query_paged", "Hybrid", "from 'Hybrid' where title = $title", {"title": "dune"})
        ]

    def test_no_match_returns_none(self, seeded_store):
        assert QueryRouter(seeded_store).query("Single", "NoSuchTitle") is None

    def test_person_search_on_single_is_parameterized(self, fake_store):
        fake_store.queue_pages([Page([{"id": "m1", "title": "dune"}], 2.0, "op-1")])

        response = QueryRouter(fake_store).query("Single", "Zed", search_kind="person")

        _, collection, query_text, parameters = fake_store.calls[0]
        assert collection == "Single"
        assert "actors[].name = $search" in query_text
        assert "directors[].name = $search" in query_text
        assert "zed" not in query_text.lower()
        assert parameters == {"search": "zed"}
        assert response.diagnostics.query_type == "SQL Query"
        assert response.diagnostics.query_text == query_text

    def test_person_search_matches_directors_and_actors(self, fake_store, sample_movies):
        Seeder(fake_store, BASE_URL).seed(sample_movies)
        router = QueryRouter(fake_store)

        directed = router.query("Single", "Vera", search_kind="person")
        acted = router.query("Single", "ZED", search_kind="person")

        assert sorted(doc["id"] for doc in directed.results) == ["m1", "m2", "m3"]
        assert sorted(doc["id"] for doc in acted.results) == ["m1", "m2"]
        assert router.query("Single", "Nobody", search_kind="person") is None

    def test_person_search_other_models_falls_back_to_title(self, fake_store):
        fake_store.queue_pages([Page([{"id": "act7", "title": "zed"}], 1.0, "op-1")])

        response = QueryRouter(fake_store).query("Hybrid", "Zed", search_kind="person")

        _, _, query_text, parameters = fake_store.calls[0]
        assert query_text == "from 'Hybrid' where title = $title"
        assert parameters == {"title": "zed"}
        assert response.results[0]["id"] == "act7"

    def test_drains_all_pages(self, fake_store):
        fake_store.queue_pages(
            [
                Page([{"id": "a"}, {"id": "b"}], 1.25, "op-1"),
                Page([], 0.5, "op-2"),
                Page([{"id": "c"}], 2.0, "op-3"),
            ]
        )

        response = QueryRouter(fake_store).query("Single", "Dune")

        assert [doc["id"] for doc in response.results] == ["a", "b", "c"]
        assert response.diagnostics.request_charge == "3.75"
        assert response.total_cost == pytest.approx(3.75)
        assert response.diagnostics.activity_id == "op-3"

    def test_all_pages_empty_returns_none(self, fake_store):
        fake_store.queue_pages([Page([], 1.0, "op-1"), Page([], 1.0, "op-2")])

        assert QueryRouter(fake_store).query("Single", "Dune") is None

    def test_store_failure_propagates(self):
        store = MagicMock()
        store.query_paged.side_effect = StoreUnavailableError("down")

        with pytest.raises(StoreUnavailableError):
            QueryRouter(store).query("Single", "Dune")


class TestQueryResponse:
    def test_to_dict_shape(self, seeded_store):
        payload = QueryRouter(seeded_store).query("Single", "Dune", doc_id="m1").to_dict()

        assert set(payload) == {"mediaResults", "requestDiagnostics"}
        assert payload["requestDiagnostics"]["query_type"] == "Point Read"
        assert payload["mediaResults"][0]["original_title"] == "Dune"
