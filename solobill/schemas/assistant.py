"""
Assistant schemas for generated notes and financial insights.
"""

from pydantic import BaseModel, Field

from solobill.schemas.base import BaseSchema


class Insight(BaseSchema):
    """One financial insight with a suggested action."""

    insight: str
    action: str


class NotesRequest(BaseSchema):
    """Campaign context used to draft invoice notes."""

    context: str = ""


class NotesResponse(BaseSchema):
    """Drafted notes; ``fallback`` is true when the static text was used."""

    notes: str
    fallback: bool = False


class InsightsRequest(BaseSchema):
    """Restrict the analysis to some invoices (all when empty)."""

    invoice_ids: list[str] = Field(default_factory=list)


class InsightsResponse(BaseSchema):
    """Generated insights; ``fallback`` is true when none could be produced."""

    insights: list[Insight]
    fallback: bool = False


class InsightFeedStatus(BaseSchema):
    """Latest delivered insights and whether a refresh is running."""

    insights: list[Insight]
    fallback: bool = False
    pending: bool = False
    delivered: bool = False


# Gemini generateContent reply envelope

class GeminiPart(BaseModel):
    text: str | None = None


class GeminiContent(BaseModel):
    parts: list[GeminiPart] = Field(default_factory=list)


class GeminiCandidate(BaseModel):
    content: GeminiContent


class GeminiReply(BaseModel):
    """Only the fields used to read the reply text."""

    candidates: list[GeminiCandidate] = Field(min_length=1)

    @property
    def text(self) -> str:
        return "".join(part.text or "" for part in self.candidates[0].content.parts)
