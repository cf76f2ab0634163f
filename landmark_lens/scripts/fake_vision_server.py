"""
Fake Google Cloud Vision server for testing CloudVision without an API key.

Simulates POST /v1/images:annotate for LANDMARK_DETECTION.
Every image is "recognised" as the configured landmark; the API key
"bad-key" gets the same 403 the real service returns, and the key
"empty" gets an empty annotation.

Usage:
    python -m landmark_lens.scripts.fake_vision_server
    VISION_API_URL=http://localhost:9000/v1/images:annotate \
    GOOGLE_CLOUD_VISION_API_KEY=test landmark-lens
"""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

app = FastAPI(title="fake-vision-server")

LANDMARK = {
    "mid": "/m/02j81",
    "description": "Eiffel Tower",
    "score": 0.92,
    "locations": [{"latLng": {"latitude": 48.8584, "longitude": 2.2945}}],
}


@app.post("/v1/images:annotate")
async def annotate(request: Request, key: str = ""):
    if key == "bad-key":
        return JSONResponse(status_code=403, content={
            "error": {"code": 403, "message": "API key not valid.", "status": "PERMISSION_DENIED"}})

    body = await request.json()
    responses = []
    for req in body.get("requests", []):
        content = req.get("image", {}).get("content")
        if not content:
            responses.append({"error": {"code": 3, "message": "image content missing"}})
            continue
        print(f"[vision] annotate {len(content)} b64 chars features={req.get('features')}")
        responses.append({} if key == "empty" else {"landmarkAnnotations": [LANDMARK]})
    return {"responses": responses}


if __name__ == "__main__":
    print("Fake vision server starting on http://localhost:9000")
    uvicorn.run(app, host="0.0.0.0", port=9000)
