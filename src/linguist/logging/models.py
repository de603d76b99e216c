"""Usage logging data models."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class UsageLog(BaseModel):
    """One AI request made on behalf of the user."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=datetime.now)
    mode: Literal["analyze", "rewrite", "plagiarism"]
    model: str | None = None
    tone: str | None = None
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    search_count: int = 0
    suggestion_count: int = 0
    elapsed_seconds: float = 0.0
    estimated_cost_usd: float = 0.0
    success: bool = True
    error_message: str | None = None
