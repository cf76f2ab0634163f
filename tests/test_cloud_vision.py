"""
Tests for the Google Cloud Vision adapter, run against the fake annotate server.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from landmark_lens.adapters.vision.cloud_vision import CloudVision
from landmark_lens.orchestrator.contracts import GeoPoint
from landmark_lens.orchestrator.errors import ClassificationFailed
from landmark_lens.scripts.fake_vision_server import app as fake_app

URL = "http://testserver/v1/images:annotate"


@pytest.fixture
def fake_client():
    with TestClient(fake_app) as client:
        yield client


def make_vision(status, client, key="test-key"):
    return CloudVision(status, api_key=key, api_url=URL, client=client)


class TestDetectLandmarks:
    def test_parses_landmark(self, status, fake_client):
        candidates = make_vision(status, fake_client).detect_landmarks(b"\xff\xd8jpeg")
        assert len(candidates) == 1
        assert candidates[0].name == "Eiffel Tower"
        assert candidates[0].score == pytest.approx(0.92)
        assert candidates[0].locations == [GeoPoint(48.8584, 2.2945)]

    def test_empty_annotation(self, status, fake_client):
        assert make_vision(status, fake_client, key="empty").detect_landmarks(b"img") == []

    def test_auth_error(self, status, fake_client):
        with pytest.raises(ClassificationFailed, match="HTTP 403"):
            make_vision(status, fake_client, key="bad-key").detect_landmarks(b"img")

    def test_missing_key(self, status, monkeypatch):
        monkeypatch.delenv("GOOGLE_CLOUD_VISION_API_KEY", raising=False)
        vision = CloudVision(status, api_url=URL)
        assert not vision.ready
        with pytest.raises(ClassificationFailed, match="api key"):
            vision.detect_landmarks(b"img")


class TestWireFormat:
    def _vision_with_handler(self, status, handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        return CloudVision(status, api_key="k", api_url=URL, max_results=3, client=client)

    def test_request_body(self, status):
        seen = {}

        def handler(request: httpx.Request):
            seen["key"] = request.url.params["key"]
            seen["body"] = request.content
            return httpx.Response(200, json={"responses": [{}]})

        self._vision_with_handler(status, handler).detect_landmarks(b"abc")
        assert seen["key"] == "k"
        assert b'"content":"YWJj"' in seen["body"].replace(b" ", b"")
        assert b'"type":"LANDMARK_DETECTION"' in seen["body"].replace(b" ", b"")
        assert b'"maxResults":3' in seen["body"].replace(b" ", b"")

    def test_per_image_error(self, status):
        def handler(request):
            return httpx.Response(200, json={"responses": [{"error": {"code": 3, "message": "Bad image data."}}]})

        with pytest.raises(ClassificationFailed, match="Bad image data"):
            self._vision_with_handler(status, handler).detect_landmarks(b"abc")

    def test_malformed_json(self, status):
        def handler(request):
            return httpx.Response(200, content=b"<html>oops</html>")

        with pytest.raises(ClassificationFailed, match="malformed"):
            self._vision_with_handler(status, handler).detect_landmarks(b"abc")

    def test_transport_error(self, status):
        def handler(request):
            raise httpx.ConnectError("no route to host")

        with pytest.raises(ClassificationFailed, match="transport"):
            self._vision_with_handler(status, handler).detect_landmarks(b"abc")

    def test_zero_coordinates_omitted_on_wire(self, status):
        def handler(request):
            return httpx.Response(200, json={"responses": [{"landmarkAnnotations": [
                {"description": "Null Island", "score": 0.4, "locations": [{"latLng": {}}]}]}]})

        candidates = self._vision_with_handler(status, handler).detect_landmarks(b"abc")
        assert candidates[0].locations == [GeoPoint(0.0, 0.0)]

    def test_non_finite_coordinate_is_malformed(self, status):
        def handler(request):
            body = (b'{"responses":[{"landmarkAnnotations":[{"description":"Nowhere","score":0.5,'
                    b'"locations":[{"latLng":{"latitude":Infinity,"longitude":2.0}}]}]}]}')
            return httpx.Response(200, content=body, headers={"content-type": "application/json"})

        with pytest.raises(ClassificationFailed, match="malformed landmark annotation"):
            self._vision_with_handler(status, handler).detect_landmarks(b"abc")

    def test_ready_with_key(self, status):
        assert CloudVision(status, api_key="k", api_url=URL).ready
