import logging
import os
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from landmark_lens.services.api import app as api_app

root = Path(__file__).resolve().parent

# mounted sub-apps don't get lifespan events, so run the API's here
app = FastAPI(title="landmark-lens web", lifespan=api_app.router.lifespan_context)

# "/" must be registered BEFORE the catch-all mount("") or it gets intercepted
@app.get("/", response_class=HTMLResponse)
def index():
    return (root / "templates" / "index.html").read_text(encoding="utf-8")

# serve static files
app.mount("/static", StaticFiles(directory=str(root / "static")), name="static")

# mount API sub-app last — catch-all prefix "" would shadow routes above it
app.mount("", api_app)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    main()
