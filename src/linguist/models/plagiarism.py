"""Pydantic models for web originality checks."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class PlagiarismMatch(BaseModel):
    segment: str
    source_url: str
    source_title: str
    similarity: Literal["High", "Medium", "Low"]


class PlagiarismResult(BaseModel):
    matches: list[PlagiarismMatch] = []
    originality_score: int = 100
    status: Literal["clean", "suspicious", "detected"] = "clean"
