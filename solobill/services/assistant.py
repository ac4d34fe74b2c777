"""
Assistant Service.
Drafts invoice notes and financial insights with Gemini.

Generation never raises to the caller: every call returns a
GenerationResult that is either a success or a fallback value.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import httpx
from pydantic import TypeAdapter

from solobill.core.config import settings
from solobill.models.invoice import Invoice
from solobill.schemas.assistant import GeminiReply, Insight


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_NOTES_CONTEXT = "digital advertising and social media management"
NOTES_FALLBACK = "Thank you for choosing our advertising services."
NOTES_EMPTY_REPLY = "Thank you for your business. Please settle ad spend reimbursements promptly."

INSIGHTS_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "insight": {"type": "STRING"},
            "action": {"type": "STRING"},
        },
        "required": ["insight", "action"],
    },
}

_insights_adapter = TypeAdapter(list[Insight])
_reply_adapter = TypeAdapter(GeminiReply)


class AssistantUnavailableError(RuntimeError):
    """Raised when the generation backend cannot be used."""


@dataclass(frozen=True)
class GenerationResult(Generic[T]):
    """
    Outcome of a generation call.

    Attributes:
        value: Generated value, or the fallback when ``ok`` is False
        ok: True when the value comes from the model
        error: Why the fallback was used
    """

    value: T
    ok: bool = True
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "GenerationResult[T]":
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, error: str) -> "GenerationResult[T]":
        return cls(value=value, ok=False, error=error)


# Errors that turn a generation call into a fallback
GENERATION_ERRORS = (
    AssistantUnavailableError,
    httpx.HTTPError,
    TypeError,
    ValueError,
)


def notes_context(invoice: Invoice) -> str:
    """Comma-joined non-empty item descriptions of an invoice."""
    return ", ".join(item.description for item in invoice.items if item.description)


def _invoice_payload(invoices: Iterable[Invoice]) -> str:
    return json.dumps([i.model_dump(mode="json") for i in invoices])


class AssistantService:
    """Service for Gemini text and insight generation."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
    ):
        self.http_client = http_client
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")

    def _is_configured(self) -> bool:
        """Check if an API key is available."""
        return bool(self.api_key)

    async def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        headers = {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }
        if self.http_client is not None:
            return await self.http_client.post(url, headers=headers, json=payload)

        async with httpx.AsyncClient(timeout=settings.GEMINI_TIMEOUT) as client:
            return await client.post(url, headers=headers, json=payload)

    async def _generate(self, prompt: str, generation_config: dict[str, Any]) -> str:
        """
        Send one prompt to Gemini and return the reply text.

        Raises:
            AssistantUnavailableError: If no API key is configured
            httpx.HTTPError: On transport or HTTP status errors
            pydantic.ValidationError: If the reply is not a Gemini envelope
        """
        if not self._is_configured():
            raise AssistantUnavailableError("GEMINI_API_KEY is not set")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

        response = await self._post(url, payload)
        response.raise_for_status()

        return _reply_adapter.validate_json(response.content).text

    async def generate_notes(self, context: str) -> GenerationResult[str]:
        """
        Draft the "Notes" section of an invoice.

        Args:
            context: Campaign context, usually the item descriptions

        Returns:
            Drafted notes, or a static thank-you text on failure
        """
        context = context.strip() or DEFAULT_NOTES_CONTEXT
        prompt = (
            "You are an expert Digital Advertising freelancer. Draft a professional "
            f'invoice "Notes" section based on this campaign context: {context}. '
            "Mention payment terms for ad spending and performance monitoring. "
            "Keep it under 60 words."
        )

        try:
            text = await self._generate(prompt, {"temperature": 0.7})
        except GENERATION_ERRORS as e:
            logger.warning(f"Notes generation failed: {e}")
            return GenerationResult.fallback(NOTES_FALLBACK, str(e))

        text = text.strip()
        if not text:
            return GenerationResult.fallback(NOTES_EMPTY_REPLY, "empty reply")
        return GenerationResult.success(text)

    async def analyze(self, invoices: Iterable[Invoice]) -> GenerationResult[list[Insight]]:
        """
        Ask for three insights on margin, ad-spend-to-fee ratio and revenue trends.

        Returns:
            Insights, or an empty list on failure
        """
        prompt = (
            "As a Digital Marketing financial consultant, analyze these advertising "
            "invoices and provide 3 key insights on margin, ad-spend-to-fee ratio, "
            f"and revenue trends: {_invoice_payload(invoices)}"
        )
        generation_config = {
            "responseMimeType": "application/json",
            "responseSchema": INSIGHTS_SCHEMA,
        }

        try:
            text = await self._generate(prompt, generation_config)
            insights = _insights_adapter.validate_json(text or "[]")
        except GENERATION_ERRORS as e:
            logger.warning(f"Insight analysis failed: {e}")
            return GenerationResult.fallback([], str(e))

        return GenerationResult.success(insights)


class InsightFeed:
    """
    Runs insight analysis in the background.

    A refresh starts an asyncio task; its result (or fallback) is kept as
    the latest value and handed to the single subscriber, if any.
    """

    def __init__(self):
        self._task: asyncio.Task | None = None
        self._latest: GenerationResult[list[Insight]] | None = None
        self._subscriber: Callable[[GenerationResult[list[Insight]]], None] | None = None

    @property
    def latest(self) -> GenerationResult[list[Insight]] | None:
        return self._latest

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, callback: Callable[[GenerationResult[list[Insight]]], None] | None) -> None:
        """Set the subscriber, replacing any previous one."""
        self._subscriber = callback

    def refresh(self, service: AssistantService, invoices: Iterable[Invoice]) -> bool:
        """
        Start a background analysis.

        Returns:
            False if an analysis is already running
        """
        if self.pending:
            return False
        self._task = asyncio.create_task(self._run(service, tuple(invoices)))
        return True

    async def _run(self, service: AssistantService, invoices: tuple[Invoice, ...]) -> None:
        result = await service.analyze(invoices)
        self._latest = result
        if self._subscriber is not None:
            try:
                self._subscriber(result)
            except Exception:
                logger.exception("Insight subscriber failed")

    async def wait(self) -> GenerationResult[list[Insight]] | None:
        """Wait for the running analysis, if any, and return the latest result."""
        if self._task is not None:
            await self._task
        return self._latest

    def reset(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._latest = None
        self._subscriber = None


# Process-wide feed used by the API
insight_feed = InsightFeed()


def get_assistant_service() -> AssistantService:
    """Dependency returning an assistant configured from settings."""
    return AssistantService()


def get_insight_feed() -> InsightFeed:
    """Dependency returning the process-wide insight feed."""
    return insight_feed
