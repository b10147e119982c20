import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from pydantic import TypeAdapter

from classroom.generation import prompts
from classroom.generation.errors import (
    ContentValidationError,
    GenerationError,
    GenerationTimeout,
)
from classroom.generation.fallback import FALLBACK_CONTENT
from classroom.generation.parsing import (
    extract_json,
    pick_items,
    upgrade_legacy_sets,
    validate_items,
)
from classroom.generation.schemas import (
    GeneratedChoiceSet,
    GeneratedTalkPrompt,
    GenerationRequest,
    GenerationResult,
    PromptText,
    item_key,
)
from classroom.llm import LLMConnector, Message, get_llm_connector

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


@dataclass(frozen=True)
class ContentSpec:
    """How one activity asks for content and what a valid item looks like."""

    activity: str
    instruction: str
    list_key: str
    item_adapter: TypeAdapter
    temperature: float = 0.7
    max_tokens: int = 2000
    single: bool = False


_TEXT = TypeAdapter(PromptText)

CONTENT_SPECS: Dict[str, ContentSpec] = {
    "four_three_two": ContentSpec(
        "four_three_two", prompts.FOUR_THREE_TWO_INSTRUCTION, "prompts", _TEXT,
        temperature=0.8, max_tokens=800,
    ),
    "question_cards": ContentSpec(
        "question_cards", prompts.QUESTION_CARDS_INSTRUCTION, "prompts", _TEXT,
        temperature=0.8,
    ),
    "agree_disagree": ContentSpec(
        "agree_disagree", prompts.AGREE_DISAGREE_INSTRUCTION, "statements", _TEXT,
        temperature=0.8,
    ),
    "timed_talk": ContentSpec(
        "timed_talk", prompts.TIMED_TALK_INSTRUCTION, "prompt",
        TypeAdapter(GeneratedTalkPrompt), max_tokens=800, single=True,
    ),
    "this_or_that": ContentSpec(
        "this_or_that", prompts.THIS_OR_THAT_INSTRUCTION, "sets",
        TypeAdapter(GeneratedChoiceSet),
    ),
}


def get_content_spec(activity: str) -> ContentSpec:
    spec = CONTENT_SPECS.get(activity)
    if spec is None:
        raise ValueError(f"No content generator for activity '{activity}'.")
    return spec


class ContentGenerator:
    """
    Turns a GenerationRequest into validated activity content.

    generate() blocks on the LLM call; generate_async() runs it in a worker
    thread under a timeout, and the awaiting task may be cancelled by the
    presenter. On any failure the caller's existing content is untouched:
    results are only ever returned, never written anywhere.
    """

    def __init__(
        self,
        llm: Optional[LLMConnector] = None,
        timeout: float = DEFAULT_TIMEOUT,
        connector_factory: Callable[[], LLMConnector] = get_llm_connector,
    ):
        self._llm = llm
        self._connector_factory = connector_factory
        self.timeout = timeout

    @property
    def llm(self) -> LLMConnector:
        if self._llm is None:
            try:
                self._llm = self._connector_factory()
            except ValueError as e:
                logger.error(f"Could not create LLM connector: {e}")
                raise GenerationError(f"AI generation is not configured: {e}") from e
        return self._llm

    def build_prompt(self, request: GenerationRequest) -> str:
        spec = get_content_spec(request.activity)

        guidance = ""
        if request.guidance:
            guidance = prompts.GUIDANCE_FRAGMENT.format(guidance=request.guidance)
        exclusions = ""
        if request.exclude:
            exclusions = prompts.EXCLUSION_FRAGMENT.format(
                exclusions="\n".join(f"- {item}" for item in request.exclude)
            )

        return spec.instruction.format(
            count=request.count,
            options_per_set=request.options_per_set,
            cefr_guide=prompts.CEFR_GUIDE.format(cefr_level=request.cefr_level),
            guidance=guidance,
            exclusions=exclusions,
        )

    def generate(self, request: GenerationRequest) -> GenerationResult:
        spec = get_content_spec(request.activity)
        prompt = self.build_prompt(request)
        logger.info(
            f"Generating {request.count} item(s) for {request.activity} "
            f"at {request.cefr_level}"
        )

        try:
            text = self.llm.get_text_response(
                prompts.CONTENT_SYSTEM_PROMPT,
                [Message(role="user", content=prompt)],
                temperature=spec.temperature,
                max_tokens=spec.max_tokens,
            )
        except GenerationError:
            raise
        except Exception as e:
            logger.error(f"Content generation failed for {request.activity}: {e}", exc_info=True)
            raise GenerationError(f"Content generation failed: {e}") from e

        return self.parse(request, text)

    def parse(self, request: GenerationRequest, text: str) -> GenerationResult:
        spec = get_content_spec(request.activity)
        data = extract_json(text)

        raw_items = pick_items(data, spec.list_key)
        if request.activity == "this_or_that":
            raw_items = upgrade_legacy_sets(raw_items)

        valid, errors = validate_items(raw_items, spec.item_adapter)
        if request.activity == "this_or_that":
            sized = [s for s in valid if len(s.options) == request.options_per_set]
            errors += ["wrong option count"] * (len(valid) - len(sized))
            valid = sized

        kept = self._drop_repeats(valid, request.exclude)
        rejected = len(raw_items) - len(kept)

        if not kept:
            raise ContentValidationError(
                "The AI response contained no usable items.", raw_text=text, errors=errors
            )

        limit = 1 if spec.single else request.count
        return GenerationResult(
            activity=request.activity, items=kept[:limit], rejected=rejected
        )

    async def generate_async(self, request: GenerationRequest) -> GenerationResult:
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.generate, request), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(f"Generation for {request.activity} timed out after {self.timeout}s")
            raise GenerationTimeout(
                f"The AI took longer than {self.timeout:.0f} seconds. Please try again."
            ) from e

    def fallback(self, request: GenerationRequest) -> GenerationResult:
        spec = get_content_spec(request.activity)
        items = self._drop_repeats(list(FALLBACK_CONTENT[request.activity]), request.exclude)
        if not items:
            items = list(FALLBACK_CONTENT[request.activity])
        limit = 1 if spec.single else request.count
        logger.info(f"Using built-in content for {request.activity}")
        return GenerationResult(
            activity=request.activity, items=items[:limit], used_fallback=True
        )

    @staticmethod
    def _drop_repeats(items: List[Any], exclude: List[str]) -> List[Any]:
        seen = {e.strip().lower() for e in exclude}
        kept = []
        for item in items:
            key = item_key(item)
            if key in seen:
                continue
            seen.add(key)
            kept.append(item)
        return kept
