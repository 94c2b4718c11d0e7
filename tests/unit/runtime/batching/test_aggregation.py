"""Unit tests for sub-response aggregation."""

from __future__ import annotations

import pytest

from laakhay.store.core import OutcomeCategory, PreconditionViolationError
from laakhay.store.models import RequestDescriptor, ResponseEnvelope
from laakhay.store.runtime.batching import DEFAULT_STATUS_MAPPING, StatusMapping, aggregate


def _pairs(statuses: list[int]) -> tuple[list[ResponseEnvelope], list[RequestDescriptor]]:
    requests = [RequestDescriptor(path=f"/records/{i}", method="PUT") for i in range(len(statuses))]
    responses = [ResponseEnvelope.build(status, body={"i": i}) for i, status in enumerate(statuses)]
    return responses, requests


class TestStatusMapping:
    """Test the default status mapping."""

    @pytest.mark.parametrize(
        ("status", "category"),
        [
            (200, OutcomeCategory.PUBLISHED),
            (202, OutcomeCategory.PUBLISHED),
            (201, OutcomeCategory.CREATED),
            (304, OutcomeCategory.UNCHANGED),
            (301, OutcomeCategory.UNCHANGED),
            (404, OutcomeCategory.SKIPPED),
            (409, OutcomeCategory.CONFLICT),
            (412, OutcomeCategory.CONFLICT),
            (400, OutcomeCategory.CLIENT_ERROR),
            (403, OutcomeCategory.CLIENT_ERROR),
            (500, OutcomeCategory.SERVER_ERROR),
            (503, OutcomeCategory.SERVER_ERROR),
            (999, OutcomeCategory.SERVER_ERROR),
            (0, OutcomeCategory.SERVER_ERROR),
        ],
    )
    def test_default_classification(self, status, category):
        assert DEFAULT_STATUS_MAPPING.classify(status) is category

    def test_custom_mapping(self):
        """Test exact codes override ranges in a custom mapping."""
        mapping = StatusMapping(exact={404: OutcomeCategory.CLIENT_ERROR})
        assert mapping.classify(404) is OutcomeCategory.CLIENT_ERROR
        # Ranges still use the defaults
        assert mapping.classify(201) is OutcomeCategory.PUBLISHED

    def test_invalid_target_rejected(self):
        with pytest.raises(ValueError):
            StatusMapping(exact={200: "ok"})


class TestAggregate:
    """Test aggregate()."""

    def test_total_and_association(self):
        """Test every pair lands in exactly one category, keeping its association."""
        statuses = [200, 201, 412, 404, 500, 200, 400, 304]
        responses, requests = _pairs(statuses)

        result = aggregate(responses, requests)

        assert result.total == len(statuses)
        for pairs in result.categories.values():
            for request, response in pairs:
                assert request.path == f"/records/{response.body['i']}"

    def test_relative_order_preserved(self):
        """Test pairs keep their original relative order within a category."""
        responses, requests = _pairs([200, 500, 200, 200])

        result = aggregate(responses, requests)

        published = [response.body["i"] for _, response in result[OutcomeCategory.PUBLISHED]]
        assert published == [0, 2, 3]

    def test_all_categories_present(self):
        responses, requests = _pairs([200])
        result = aggregate(responses, requests)
        assert set(result.categories) == set(OutcomeCategory)
        assert result["conflict"] == []

    def test_has_errors(self):
        assert aggregate(*_pairs([412])).has_errors
        assert not aggregate(*_pairs([200, 201, 304, 404])).has_errors

    def test_counts(self):
        counts = aggregate(*_pairs([200, 200, 412])).counts()
        assert counts[OutcomeCategory.PUBLISHED] == 2
        assert counts[OutcomeCategory.CONFLICT] == 1

    def test_length_mismatch(self):
        """Test mismatched lengths fail loudly."""
        responses, requests = _pairs([200, 200])
        with pytest.raises(PreconditionViolationError):
            aggregate(responses, requests[:1])
