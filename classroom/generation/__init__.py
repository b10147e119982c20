"""
Content generation for the setup screens.

Contains:
- ContentGenerator: prompt -> LLM -> validated items, with timeout and fallback
- GenerationRequest / GenerationResult: request and result models
- GenerationError and subclasses
"""

from classroom.generation.content_generator import ContentGenerator
from classroom.generation.errors import (
    ContentValidationError,
    GenerationError,
    GenerationTimeout,
)
from classroom.generation.schemas import GenerationRequest, GenerationResult, item_key
