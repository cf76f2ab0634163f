"""
Google Cloud Vision landmark detector.
Calls the images:annotate REST endpoint with a LANDMARK_DETECTION feature.
Requires GOOGLE_CLOUD_VISION_API_KEY in .env.

No extra dependencies — uses httpx.
"""
import base64
import math
import os
from typing import List

import httpx

from landmark_lens.adapters.vision.base import VisionAdapter
from landmark_lens.orchestrator.contracts import GeoPoint, LandmarkCandidate
from landmark_lens.orchestrator.errors import ClassificationFailed

VISION_API_URL = "https://vision.googleapis.com/v1/images:annotate"


class CloudVision(VisionAdapter):
    def __init__(self, status_store, api_key: str | None = None, api_url: str | None = None,
                 max_results: int | None = None, timeout: float | None = None,
                 client: httpx.Client | None = None):
        self.status = status_store
        self._api_key = api_key if api_key is not None else os.getenv("GOOGLE_CLOUD_VISION_API_KEY")
        self._api_url = api_url or os.getenv("VISION_API_URL", VISION_API_URL)
        self._max_results = max_results or int(os.getenv("VISION_MAX_RESULTS", "5"))
        self._timeout = timeout or float(os.getenv("VISION_TIMEOUT", "15.0"))
        self._client = client
        self._ready = bool(self._api_key)
        if self._ready:
            self.status.log(f"cloud_vision: ready ({self._api_url})")
        else:
            self.status.log("cloud_vision: GOOGLE_CLOUD_VISION_API_KEY not set")

    @property
    def ready(self) -> bool:
        return self._ready

    def detect_landmarks(self, image_bytes: bytes) -> List[LandmarkCandidate]:
        if not self._ready:
            raise ClassificationFailed("api key not configured")

        b64 = base64.standard_b64encode(image_bytes).decode("utf-8")
        payload = {
            "requests": [
                {
                    "image": {"content": b64},
                    "features": [{"type": "LANDMARK_DETECTION", "maxResults": self._max_results}],
                }
            ]
        }

        try:
            resp = self._post(payload)
        except httpx.HTTPError as e:
            self.status.log(f"cloud_vision: transport error: {e}")
            raise ClassificationFailed(f"transport error: {e}") from e

        if not resp.is_success:
            self.status.log(f"cloud_vision: HTTP {resp.status_code} — {resp.text[:300]}")
            raise ClassificationFailed(f"HTTP {resp.status_code}")

        try:
            body = resp.json()
            annotation = body["responses"][0]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ClassificationFailed(f"malformed response: {e}") from e

        if "error" in annotation:
            message = annotation["error"].get("message", "unknown error")
            self.status.log(f"cloud_vision: API error: {message}")
            raise ClassificationFailed(message)

        candidates = [self._parse_candidate(a) for a in annotation.get("landmarkAnnotations", [])]
        self.status.log(f"cloud_vision: {len(candidates)} candidate(s)")
        return candidates

    def _post(self, payload: dict) -> httpx.Response:
        params = {"key": self._api_key}
        if self._client is not None:
            return self._client.post(self._api_url, params=params, json=payload, timeout=self._timeout)
        return httpx.post(self._api_url, params=params, json=payload, timeout=self._timeout)

    def _parse_candidate(self, raw: dict) -> LandmarkCandidate:
        try:
            locations = [
                GeoPoint(latitude=float(loc["latLng"].get("latitude", 0.0)),
                         longitude=float(loc["latLng"].get("longitude", 0.0)))
                for loc in raw.get("locations", [])  # zero-valued fields are omitted on the wire
            ]
            for point in locations:
                if not (math.isfinite(point.latitude) and math.isfinite(point.longitude)):
                    raise ValueError(f"non-finite coordinate {point}")
            return LandmarkCandidate(name=raw["description"], score=float(raw.get("score", 0.0)),
                                     locations=locations)
        except (KeyError, TypeError, ValueError) as e:
            raise ClassificationFailed(f"malformed landmark annotation: {e}") from e
