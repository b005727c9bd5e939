"""Pipeline orchestration for intake-to-CVUF generation."""

from __future__ import annotations

import secrets
import string
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Mapping

from .artifacts import (
    estimate_build_time,
    estimate_hours,
    generate_dependencies,
    generate_pitch_points,
    generate_setup_guide,
)
from .config import LLMConfig, ServiceConfig
from .document import ResponseParser, SchemaGuard, serialize
from .intake import InputNormalizer
from .llm import LLMRunner
from .logging import get_logger
from .matching import TemplateMatcher
from .models import GenerationResult, IntakeRequest, TemplateMatch, ValidationWarning
from .notify import (
    BestEffortDispatcher,
    Collaborators,
    build_chat_payload,
    build_collaborators,
    build_email_message,
    build_sheet_record,
)
from .prompting import PromptBuilder, PromptRequest
from .validators import ValidationEngine

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_request_id(clock: Callable[[], float] = time.time) -> str:
    """Return ``req_<epoch-ms>_<9 random base36 chars>``."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"req_{int(clock() * 1000)}_{suffix}"


def _utc_timestamp() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class PreviewResult:
    """Everything the pipeline decides before calling the provider."""

    request: IntakeRequest
    template_match: TemplateMatch
    warnings: List[ValidationWarning]
    estimated_hours: int
    build_time: str
    prompt: PromptRequest

    def to_dict(self) -> Dict[str, Any]:
        return {
            "request": self.request.to_payload(),
            "templateMatch": self.template_match.to_dict(),
            "warnings": [warning.to_dict() for warning in self.warnings],
            "estimatedHours": self.estimated_hours,
            "buildTime": self.build_time,
            "prompt": self.prompt.messages[-1].content,
        }


class Orchestrator:
    """Runs one intake payload through the full generation pipeline."""

    def __init__(
        self,
        config: ServiceConfig | None = None,
        *,
        normalizer: InputNormalizer | None = None,
        matcher: TemplateMatcher | None = None,
        validation_engine: ValidationEngine | None = None,
        prompt_builder: PromptBuilder | None = None,
        llm_runner: LLMRunner | None = None,
        parser: ResponseParser | None = None,
        guard: SchemaGuard | None = None,
        collaborators: Collaborators | None = None,
        dispatcher: BestEffortDispatcher | None = None,
    ) -> None:
        self.config = config or ServiceConfig()
        self.normalizer = normalizer or InputNormalizer()
        self.matcher = matcher or TemplateMatcher()
        self.validation_engine = validation_engine or ValidationEngine()
        self.prompt_builder = prompt_builder or PromptBuilder(max_tokens=self.config.llm.max_tokens)
        self.llm_runner = llm_runner or self._build_llm_runner(self.config.llm)
        self.parser = parser or ResponseParser()
        self.guard = guard or SchemaGuard(strict=self.config.validation.strict_document)
        self.collaborators = collaborators or build_collaborators(self.config.notifications)
        self.dispatcher = dispatcher or BestEffortDispatcher()
        self.logger = get_logger("orchestrator")

    def preview(self, payload: Mapping[str, Any]) -> PreviewResult:
        """Run every offline step and return the prompt that would be sent."""
        request = self.normalizer.normalize(payload)
        warnings = self.validation_engine.validate(request)
        match = self.matcher.match(request.microapp_description, request.owning_department)
        return PreviewResult(
            request=request,
            template_match=match,
            warnings=warnings,
            estimated_hours=estimate_hours(request),
            build_time=estimate_build_time(request),
            prompt=self.prompt_builder.build_request(request, match),
        )

    async def generate(self, payload: Mapping[str, Any]) -> GenerationResult:
        """Generate the CVUF document and artifacts for ``payload``.

        Synthesis failures are logged to the sheet collaborator with empty
        inputs and re-raised. Collaborator deliveries never fail the request.
        """
        request_id = new_request_id()
        started = time.monotonic()
        self.logger.info("Starting generation %s", request_id)

        try:
            request = self.normalizer.normalize(payload)
            warnings = self.validation_engine.validate(request)
            match = self.matcher.match(request.microapp_description, request.owning_department)
            self.logger.info(
                "Request %s: template match %s (score %d), %d warning(s)",
                request_id,
                match.template_id or "none",
                match.score,
                len(warnings),
            )
            prompt = self.prompt_builder.build_request(request, match)
            raw_text = await self.llm_runner.run(prompt.messages[-1].content, system=prompt.system)
            parsed = self.parser.parse(raw_text)
            generation_time_ms = _elapsed_ms(started)
            document, issues = self.guard.enforce(parsed, fallback_name=request.microapp_name)
        except Exception as exc:
            self.logger.error("Generation %s failed: %s", request_id, exc)
            self.dispatcher.dispatch(
                "sheet",
                self.collaborators.sheet,
                build_sheet_record(
                    request_id=request_id,
                    timestamp=_utc_timestamp(),
                    inputs={},
                    template_match=TemplateMatch(),
                    generation_time_ms=_elapsed_ms(started),
                    warnings=[],
                    success=False,
                ),
            )
            raise

        result = GenerationResult(
            request_id=request_id,
            document=document,
            document_text=serialize(document),
            dependencies=generate_dependencies(request),
            setup_guide=generate_setup_guide(request, document),
            pitch_points=generate_pitch_points(request),
            build_time=estimate_build_time(request),
            generation_time_ms=generation_time_ms,
            template_match=match,
            warnings=list(warnings),
            issues=list(issues),
        )
        self._notify(request, result)
        self.logger.info("Finished generation %s in %dms", request_id, generation_time_ms)
        return result

    async def drain(self) -> None:
        """Wait for outstanding collaborator deliveries."""
        await self.dispatcher.drain()

    def _notify(self, request: IntakeRequest, result: GenerationResult) -> None:
        self.dispatcher.dispatch(
            "sheet",
            self.collaborators.sheet,
            build_sheet_record(
                request_id=result.request_id,
                timestamp=_utc_timestamp(),
                inputs=request.to_payload(),
                template_match=result.template_match,
                generation_time_ms=result.generation_time_ms,
                warnings=result.warnings,
                success=True,
            ),
        )
        self.dispatcher.dispatch(
            "chat",
            self.collaborators.chat,
            build_chat_payload(
                request,
                request_id=result.request_id,
                template_match=result.template_match,
                generation_time_ms=result.generation_time_ms,
                warnings=result.warnings,
            ),
        )
        self.dispatcher.dispatch("email", self.collaborators.email, build_email_message(request, result))

    @staticmethod
    def _build_llm_runner(config: LLMConfig) -> LLMRunner:
        return LLMRunner(
            config.model,
            provider=config.provider,
            base_url=config.base_url,
            api_key=config.api_key,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            request_timeout=config.request_timeout,
            max_attempts=config.max_attempts,
        )


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


__all__ = ["Orchestrator", "PreviewResult", "new_request_id"]
