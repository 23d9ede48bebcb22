import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from meeting_dispatch.api.routes.extraction import router as extraction_router
from meeting_dispatch.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title="Meeting Dispatch API",
    description="Rule-based meeting decision and action item extraction",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:8501",
    ],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(extraction_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
