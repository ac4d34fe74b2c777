"""
API Dependencies.
Common dependencies for the application store and the assistant.
"""

from typing import Annotated
from fastapi import Depends

from solobill.core.store import InMemoryStore, get_store
from solobill.services.assistant import (
    AssistantService,
    InsightFeed,
    get_assistant_service,
    get_insight_feed,
)


# Type aliases for cleaner route signatures
Store = Annotated[InMemoryStore, Depends(get_store)]
Assistant = Annotated[AssistantService, Depends(get_assistant_service)]
Feed = Annotated[InsightFeed, Depends(get_insight_feed)]
