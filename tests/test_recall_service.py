"""
Unit tests for recall aggregation: limit parsing, toy filter, normalization, merge and sort.

Upstream HTTP is served by httpx.MockTransport so tests do not hit the CPSC API.
"""

import asyncio

import httpx
import pytest

from app.core.errors import RecallSearchError
from app.services.cpsc_client import build_recall_queries, build_recall_url
from app.services.recall_service import (
    is_toy_related,
    merge_recall_batches,
    normalize_recall,
    parse_limit,
    search_toy_recalls,
)


def _record(recall_id, title="Toy Car Recall", published=None, recall_date=None, **extra) -> dict:
    rec = {
        "RecallID": recall_id,
        "Title": title,
        "Products": [{"Name": "Car", "Type": "Toy"}],
    }
    if published is not None:
        rec["LastPublishDate"] = published
    if recall_date is not None:
        rec["RecallDate"] = recall_date
    rec.update(extra)
    return rec


def _transport(by_field: dict) -> httpx.MockTransport:
    """Answer each CPSC query by the single field it filters on."""

    def handler(request: httpx.Request) -> httpx.Response:
        for field, answer in by_field.items():
            if field in request.url.params:
                if isinstance(answer, Exception):
                    raise answer
                if isinstance(answer, httpx.Response):
                    return answer
                return httpx.Response(200, json=answer)
        return httpx.Response(200, json=[])

    return httpx.MockTransport(handler)


def _search(transport: httpx.MockTransport, **kwargs):
    return asyncio.run(search_toy_recalls(transport=transport, **kwargs))


class TestParseLimit:
    """Tests for parse_limit()."""

    def test_missing_or_non_numeric_uses_default(self) -> None:
        assert parse_limit(None) == 20
        assert parse_limit("") == 20
        assert parse_limit("abc") == 20

    def test_non_positive_uses_default(self) -> None:
        assert parse_limit("0") == 20
        assert parse_limit("-5") == 20

    def test_clamps_to_max(self) -> None:
        assert parse_limit("101") == 100
        assert parse_limit("5000") == 100
        assert parse_limit("100") == 100

    def test_reads_leading_integer(self) -> None:
        assert parse_limit("15") == 15
        assert parse_limit(" 7 ") == 7
        assert parse_limit("15abc") == 15


class TestUrls:
    """Tests for the CPSC query URLs."""

    def test_single_field_and_dates(self) -> None:
        url = httpx.URL(build_recall_url("ProductName", "doll", "2024-01-01", "2024-06-30"))
        assert url.params["format"] == "json"
        assert url.params["ProductName"] == "doll"
        assert url.params["RecallDateStart"] == "2024-01-01"
        assert url.params["RecallDateEnd"] == "2024-06-30"

    def test_empty_parts_are_omitted(self) -> None:
        url = httpx.URL(build_recall_url("RecallTitle", "", None, None))
        assert dict(url.params) == {"format": "json"}

    def test_three_queries_in_fixed_order_with_defaults(self) -> None:
        urls = [httpx.URL(u) for u in build_recall_queries(None, "2023-01-01", None)]
        assert urls[0].params["ProductName"] == "toy"
        assert urls[1].params["RecallTitle"] == "toy"
        assert urls[2].params["Hazard"] == "choking"
        for u in urls:
            assert u.params["RecallDateStart"] == "2023-01-01"
            assert "RecallDateEnd" not in u.params

    def test_keyword_applies_to_every_query(self) -> None:
        urls = [httpx.URL(u) for u in build_recall_queries("lego")]
        assert [u.params.get(f) for u, f in zip(urls, ("ProductName", "RecallTitle", "Hazard"))] == ["lego"] * 3


class TestIsToyRelated:
    """Tests for is_toy_related()."""

    def test_product_type_matches(self) -> None:
        assert is_toy_related({"Title": "Recall", "Products": [{"Type": "Toys"}]})

    def test_product_description_matches_case_insensitive(self) -> None:
        assert is_toy_related({"Title": "Recall", "Products": [{"Name": "Set", "Description": "Jigsaw PUZZLE"}]})

    def test_title_matches_even_without_products(self) -> None:
        assert is_toy_related({"Title": "Juguete recall", "Description": None})

    def test_description_matches(self) -> None:
        assert is_toy_related({"Title": "Recall", "Description": "A plush toy for infants"})

    def test_non_toy_is_rejected(self) -> None:
        rec = {
            "Title": "Space Heater Recall",
            "Description": "Fire hazard",
            "Products": [{"Name": "Heater", "Type": "Appliance", "Description": "Electric"}],
        }
        assert not is_toy_related(rec)

    def test_product_only_words_do_not_match_title(self) -> None:
        # "game" counts for products but not for title/description
        assert not is_toy_related({"Title": "Game console charger", "Products": []})


class TestNormalizeRecall:
    """Tests for normalize_recall()."""

    def test_full_record(self) -> None:
        rec = {
            "RecallID": 9,
            "RecallNumber": "24-001",
            "RecallDate": "2024-01-01T00:00:00",
            "LastPublishDate": "2024-01-03T00:00:00",
            "URL": "https://www.cpsc.gov/Recalls/2024/x",
            "Title": "Doll Recall",
            "Description": "Eyes detach.",
            "Hazards": [{"Name": "  Choking hazard  "}, {"Name": "Other"}],
            "Remedies": [{"Name": " Refund "}],
            "Images": [{"URL": "https://img/1.jpg"}, {"URL": ""}, {"URL": None}, {"URL": "https://img/2.jpg"}],
            "Products": [{"Name": "Doll", "Type": "Toys", "Model": "D-1", "Description": "x", "CategoryID": "123"}],
        }
        n = normalize_recall(rec)
        assert n.id == 9
        assert n.number == "24-001"
        assert n.published == "2024-01-03T00:00:00"
        assert n.hazard == "Choking hazard"
        assert n.remedy == "Refund"
        assert n.images == ["https://img/1.jpg", "https://img/2.jpg"]
        assert n.products[0].name == "Doll"
        assert n.products[0].category_id == "123"
        assert n.model_dump(by_alias=True)["products"][0] == {
            "name": "Doll",
            "type": "Toys",
            "model": "D-1",
            "categoryId": "123",
        }

    def test_published_falls_back_to_recall_date(self) -> None:
        assert normalize_recall(_record(1, recall_date="2022-05-05")).published == "2022-05-05"
        assert normalize_recall(_record(1, published="", recall_date="2022-05-05")).published == "2022-05-05"

    def test_sparse_record(self) -> None:
        n = normalize_recall({"RecallID": 3})
        assert n.hazard == ""
        assert n.remedy == ""
        assert n.images == []
        assert n.products == []
        assert n.published is None


class TestMergeRecallBatches:
    """Tests for merge_recall_batches()."""

    def test_duplicate_id_keeps_last_query(self) -> None:
        first = _record(1, Description="from ProductName")
        last = _record(1, Description="from Hazard")
        merged = merge_recall_batches([[first], None, [last]])
        assert len(merged) == 1
        assert merged[0]["Description"] == "from Hazard"

    def test_drops_non_toy_records(self) -> None:
        heater = {"RecallID": 2, "Title": "Heater", "Products": [{"Type": "Appliance"}]}
        merged = merge_recall_batches([[_record(1), heater]])
        assert [r["RecallID"] for r in merged] == [1]

    def test_all_failed(self) -> None:
        assert merge_recall_batches([None, None, None]) == []


class TestSearchToyRecalls:
    """End-to-end aggregation over a mocked upstream."""

    def test_same_record_from_every_query(self) -> None:
        rec = _record(1, published="2023-01-01")
        transport = _transport({"ProductName": [rec], "RecallTitle": [rec], "Hazard": [rec]})
        result = _search(transport)
        assert result.count == 1
        item = result.items[0]
        assert item.id == 1
        assert item.title == "Toy Car Recall"
        assert item.published == "2023-01-01"

    def test_one_failed_query_keeps_the_others(self) -> None:
        transport = _transport({
            "ProductName": httpx.ConnectError("connection refused"),
            "RecallTitle": [_record(1, published="2023-01-01"), _record(2, published="2023-02-01")],
            "Hazard": [_record(2, title="Toy Car Recall v2", published="2023-02-01"), _record(3, published="2022-12-01")],
        })
        result = _search(transport)
        assert [i.id for i in result.items] == [2, 1, 3]
        assert result.items[0].title == "Toy Car Recall v2"

    def test_non_array_and_error_status_are_skipped(self) -> None:
        transport = _transport({
            "ProductName": {"message": "Bad request"},
            "RecallTitle": httpx.Response(503, text="unavailable"),
            "Hazard": [_record(5, published="2023-01-01")],
        })
        result = _search(transport)
        assert [i.id for i in result.items] == [5]

    def test_every_query_failing_returns_empty(self) -> None:
        err = httpx.ConnectError("down")
        result = _search(_transport({"ProductName": err, "RecallTitle": err, "Hazard": err}))
        assert result.count == 0
        assert result.items == []

    def test_sorted_newest_first_with_undated_last(self) -> None:
        records = [
            _record(1),
            _record(2, published="2021-06-01"),
            _record(3, recall_date="2023-03-01"),
            _record(4, published="not a date"),
            _record(5, published="2024-01-01T10:00:00"),
        ]
        result = _search(_transport({"ProductName": records}))
        ids = [i.id for i in result.items]
        assert ids[:3] == [5, 3, 2]
        assert set(ids[3:]) == {1, 4}

    def test_undated_sorts_after_pre_1970_dates(self) -> None:
        records = [_record(1), _record(2, recall_date="1969-06-01"), _record(3, published="1950-01-01")]
        result = _search(_transport({"RecallTitle": records}))
        assert [i.id for i in result.items] == [2, 3, 1]

    def test_truncates_to_limit(self) -> None:
        records = [_record(i, published=f"2023-01-{i:02d}") for i in range(1, 31)]
        result = _search(_transport({"ProductName": records}), limit="5")
        assert result.count == 5
        assert [i.id for i in result.items] == [30, 29, 28, 27, 26]

    def test_default_limit(self) -> None:
        records = [_record(i, published=f"2023-01-{i:02d}") for i in range(1, 31)]
        assert _search(_transport({"ProductName": records}), limit="nope").count == 20

    def test_processing_failure_raises_search_error(self) -> None:
        bad = [{"RecallID": 1, "Title": "Toy", "Products": "not-a-list"}]
        with pytest.raises(RecallSearchError):
            _search(_transport({"ProductName": bad}))
