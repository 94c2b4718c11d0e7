"""Unit tests for request/response models."""

import pytest
from pydantic import ValidationError

from laakhay.store.core import HttpMethod
from laakhay.store.models import ChangesResult, RequestDescriptor, ResponseEnvelope, ServerSettings


class TestRequestDescriptor:
    """Test RequestDescriptor."""

    def test_defaults(self):
        descriptor = RequestDescriptor(path="/")
        assert descriptor.method is HttpMethod.GET
        assert descriptor.headers == {}
        assert descriptor.body is None

    def test_lowercase_method(self):
        assert RequestDescriptor(path="/batch", method="post").method is HttpMethod.POST

    def test_invalid_method(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(path="/", method="TRACE")

    def test_empty_path(self):
        with pytest.raises(ValidationError):
            RequestDescriptor(path="")

    def test_immutable(self):
        descriptor = RequestDescriptor(path="/")
        with pytest.raises(ValidationError):
            descriptor.path = "/batch"

    def test_payload_omits_missing_body(self):
        payload = RequestDescriptor(path="/buckets/b", method="DELETE").to_payload()
        assert payload == {"path": "/buckets/b", "method": "DELETE", "headers": {}}

    def test_payload_with_body(self):
        payload = RequestDescriptor(
            path="/buckets/b", method="PUT", headers={"If-None-Match": "*"}, body={"data": {}}
        ).to_payload()
        assert payload["body"] == {"data": {}}
        assert payload["headers"] == {"If-None-Match": "*"}


class TestResponseEnvelope:
    """Test ResponseEnvelope."""

    def test_case_insensitive_headers(self):
        envelope = ResponseEnvelope.build(200, headers={"ETag": '"42"'})
        assert envelope.headers["etag"] == '"42"'
        assert envelope.headers.get("ETAG") == '"42"'

    def test_headers_read_only(self):
        envelope = ResponseEnvelope.build(200, headers={"ETag": '"42"'})
        with pytest.raises(TypeError):
            envelope.headers["ETag"] = '"43"'

    def test_from_payload(self):
        envelope = ResponseEnvelope.from_payload(
            {"status": 201, "path": "/v1/buckets/b", "headers": {"ETag": '"1"'}, "body": {"x": 1}}
        )
        assert envelope.status == 201
        assert envelope.path == "/v1/buckets/b"
        assert envelope.body == {"x": 1}
        assert envelope.ok

    def test_not_ok(self):
        assert not ResponseEnvelope.build(412).ok
        assert not ResponseEnvelope.build(304).ok


class TestServerSettings:
    """Test ServerSettings."""

    def test_extra_settings_kept(self):
        settings = ServerSettings.model_validate(
            {"batch_max_requests": 25, "readonly": True}
        )
        assert settings.batch_max_requests == 25
        assert settings.get("readonly") is True
        assert settings.get("missing", "fallback") == "fallback"

    def test_negative_limit_rejected(self):
        with pytest.raises(ValidationError):
            ServerSettings(batch_max_requests=-1)


class TestChangesResult:
    def test_has_changes(self):
        assert not ChangesResult(marker=10).has_changes
        assert ChangesResult(marker=42, changes=[{"id": "a"}]).has_changes
