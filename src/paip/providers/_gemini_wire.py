"""Gemini ``generateContent`` wire schema.

Field names are snake_case in Python and camelCase on the wire; every model
serializes through its aliases.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Part(_WireModel):
    text: str


class Content(_WireModel):
    role: Optional[str] = None
    parts: List[Part] = Field(default_factory=list)


class ThinkingConfig(_WireModel):
    thinking_budget: Optional[int] = None
    thinking_level: Optional[str] = None


class GenerationConfig(_WireModel):
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    top_k: Optional[int] = None
    max_output_tokens: Optional[int] = None
    thinking_config: Optional[ThinkingConfig] = None


class GenerateContentRequest(_WireModel):
    contents: List[Content]
    generation_config: Optional[GenerationConfig] = None


class Candidate(_WireModel):
    content: Optional[Content] = None
    finish_reason: Optional[str] = None


class ErrorObject(_WireModel):
    code: int
    message: str
    status: Optional[str] = None


class GenerateContentResponse(_WireModel):
    candidates: Optional[List[Candidate]] = None
    error: Optional[ErrorObject] = None
