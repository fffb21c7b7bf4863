"""Content ideas API."""
from uuid import UUID

from fastapi import APIRouter, Depends, status

from content_studio.context import AppContext
from content_studio.deps import get_context, get_user_id
from content_studio.schemas.content import GenerateIdeasResponse, IdeaListResponse

router = APIRouter(prefix="/api/angles", tags=["ideas"])


@router.post(
    "/{angle_id}/ideas/generate",
    response_model=GenerateIdeasResponse,
    status_code=status.HTTP_201_CREATED,
)
async def generate_ideas(
    angle_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> GenerateIdeasResponse:
    return await ctx.ideas.generate_ideas(user_id, angle_id)


@router.get("/{angle_id}/ideas", response_model=IdeaListResponse)
async def list_ideas(
    angle_id: UUID,
    user_id: UUID = Depends(get_user_id),
    ctx: AppContext = Depends(get_context),
) -> IdeaListResponse:
    """Ideas of one angle, newest first, with generated/pending counts."""
    ideas, counts = await ctx.queries.list_ideas(user_id, angle_id)
    return IdeaListResponse(angle_id=angle_id, ideas=ideas, counts=counts)
