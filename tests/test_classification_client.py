"""
Tests for landmark_lens.services.classification_client
"""
import pytest
from fakes import EIFFEL, WAIT_S, FakeVision

from landmark_lens.orchestrator.contracts import Frame, GeoPoint, LandmarkCandidate, LandmarkResult
from landmark_lens.orchestrator.errors import ClassificationFailed
from landmark_lens.services.classification_client import ClassificationClient, best_result

COLOSSEUM = LandmarkCandidate("Colosseum", 0.70, [GeoPoint(41.8902, 12.4922)])


class TestBestResult:
    def test_empty_list(self):
        assert best_result([]) is None

    def test_first_location_used(self):
        tower = LandmarkCandidate("Eiffel Tower", 0.9, [GeoPoint(48.8584, 2.2945), GeoPoint(1.0, 1.0)])
        assert best_result([tower]) == LandmarkResult("Eiffel Tower", 48.8584, 2.2945)

    def test_highest_score_wins(self):
        assert best_result([COLOSSEUM, EIFFEL]).name == "Eiffel Tower"

    def test_equal_scores_keep_service_order(self):
        a = LandmarkCandidate("A", 0.5, [GeoPoint(1.0, 1.0)])
        b = LandmarkCandidate("B", 0.5, [GeoPoint(2.0, 2.0)])
        assert best_result([a, b]).name == "A"

    def test_candidates_without_location_skipped(self):
        nowhere = LandmarkCandidate("Nowhere", 0.99, [])
        assert best_result([nowhere, COLOSSEUM]).name == "Colosseum"
        assert best_result([nowhere]) is None


class TestClassify:
    def test_returns_best_result(self, status):
        client = ClassificationClient(FakeVision([COLOSSEUM, EIFFEL]), status)
        try:
            result = client.classify(Frame(data=b"img", request_id="r1")).result(WAIT_S)
        finally:
            client.shutdown()
        assert result == LandmarkResult("Eiffel Tower", 48.8584, 2.2945)

    def test_sends_frame_bytes(self, status):
        vision = FakeVision()
        client = ClassificationClient(vision, status)
        try:
            client.classify(Frame(data=b"img", request_id="r1")).result(WAIT_S)
        finally:
            client.shutdown()
        assert vision.calls == [b"img"]

    def test_unexpected_error_becomes_classification_failed(self, status):
        client = ClassificationClient(FakeVision(error=KeyError("responses")), status)
        try:
            future = client.classify(Frame(data=b"img", request_id="r1"))
            with pytest.raises(ClassificationFailed) as exc:
                future.result(WAIT_S)
        finally:
            client.shutdown()
        assert "KeyError" in exc.value.reason

    def test_classify_after_shutdown(self, status):
        client = ClassificationClient(FakeVision(), status)
        client.shutdown()
        with pytest.raises(ClassificationFailed):
            client.classify(Frame(data=b"img", request_id="r1"))
