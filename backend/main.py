# Role: FastAPI app bootstrap. Loads environment config early, registers routers, and exposes the health endpoint.

from fastapi import FastAPI

import backend.config
backend.config.load_env()

from backend.api.frame import router as frame_router
from backend.api.images import router as images_router

app = FastAPI(title="RateMyBags Frame API", version="0.1.0")
app.include_router(frame_router)
app.include_router(images_router)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
