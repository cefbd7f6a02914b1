# Path: api/app.py
# Purpose: Expose a FastAPI application for prompt description and ranking.
# Layer: api.
# Details: Provides health checks plus describe and rank endpoints delegating to the core pipeline.

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from core.search.pipeline import PromptRankingPipeline


class DescribeRequest(BaseModel):
    prompt: str


class RankRequest(BaseModel):
    query: str
    candidates: List[str] = Field(default_factory=list)
    k: Optional[int] = None


def create_app(pipeline: Optional[PromptRankingPipeline] = None):  # type: ignore[override]
    """Create a FastAPI app instance configured with the provided ranking pipeline."""

    from fastapi import FastAPI, HTTPException

    app = FastAPI(title="promptprint API", version="0.1.0")

    def _require_pipeline() -> PromptRankingPipeline:
        if pipeline is None:
            raise HTTPException(status_code=500, detail="Ranking pipeline is not configured.")
        return pipeline

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.post("/describe")
    def describe(payload: DescribeRequest) -> Dict[str, Any]:
        """Generate an image for one prompt and return its textual description."""

        descriptor = _require_pipeline().describe(payload.prompt)
        return {
            "prompt": descriptor.prompt,
            "ready": descriptor.is_ready,
            "description": descriptor.describe(),
        }

    @app.post("/rank")
    def rank(payload: RankRequest) -> Dict[str, Any]:
        """Rank candidate prompts against the query prompt."""

        results = _require_pipeline().rank(payload.query, payload.candidates, k=payload.k)
        return {"results": [result.to_payload() for result in results]}

    return app
