"""Generated content API: generate, read, save, draft autosave."""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from content_studio.context import AppContext
from content_studio.deps import get_context, get_user_id
from content_studio.schemas.content import (
    ContentSaveRequest,
    DraftAcceptedResponse,
    GeneratedContentOut,
    GeneratedContentResponse,
)

router = APIRouter(prefix="/api", tags=["content"])


@router.post(
    "/ideas/{idea_id}/content/generate",
    response_model=GeneratedContentOut,
    status_code=status.HTTP_201_CREATED,
)
async def generate_content(
    idea_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> GeneratedContentOut:
    """Generate (or regenerate) the content of an idea; replaces any previous content."""
    return await ctx.content.generate_content(user_id, idea_id)


@router.get("/ideas/{idea_id}/content", response_model=GeneratedContentResponse)
async def get_idea_content(
    idea_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> GeneratedContentResponse:
    return await ctx.queries.idea_content(user_id, idea_id)


@router.put("/content/{content_id}", response_model=GeneratedContentOut)
async def save_content(
    content_id: UUID,
    payload: ContentSaveRequest,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> GeneratedContentOut:
    return await ctx.content.save_content(user_id, content_id, payload.content)


@router.patch(
    "/content/{content_id}/draft",
    response_model=DraftAcceptedResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def save_draft(
    content_id: UUID,
    payload: ContentSaveRequest,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> DraftAcceptedResponse:
    """Autosave: committed after the quiet window; each call restarts the window."""
    return await ctx.content.save_draft(user_id, content_id, payload.content)
