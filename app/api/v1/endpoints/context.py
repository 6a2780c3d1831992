"""Context API: forum retrieval for a chat message, plus the grounded system prompt."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_context_formatter,
    get_forum_context_service,
    get_prompt_builder,
    get_session_token,
)
from app.application.services.context_formatter import ContextFormatter
from app.application.services.prompt_builder import SystemPromptBuilder
from app.application.use_cases.forum_context import ForumContextService
from app.core.limiter import limit_context
from app.schemas.context import (
    ContextRequest,
    ContextResponse,
    ContextResultResponse,
    ContextUserResponse,
    PostSuggestionResponse,
)

router = APIRouter()


@router.post("", response_model=ContextResponse)
@limit_context
async def build_context(
    request: Request,
    body: ContextRequest,
    context_svc: Annotated[ForumContextService, Depends(get_forum_context_service)],
    formatter: Annotated[ContextFormatter, Depends(get_context_formatter)],
    prompt_builder: Annotated[SystemPromptBuilder, Depends(get_prompt_builder)],
    token: Annotated[str | None, Depends(get_session_token)],
):
    """Retrieve forum context for the message on behalf of the session's user.

    Private discussions the caller cannot read come back as teasers with
    empty content. Anonymous callers are served; an invalid token is
    treated as anonymous.
    """
    context = await context_svc.build(body.message, token)
    suggestion = context.suggestion
    user = context.user
    return ContextResponse(
        intent=context.intent.value,
        results=[
            ContextResultResponse(
                post_id=m.post_id,
                title=m.title,
                link=m.link,
                author=m.author,
                date=m.date,
                snippet=m.snippet,
                is_teaser=m.is_teaser,
                teaser_message=m.teaser_message,
            )
            for m in formatter.describe(context.search_results)
        ],
        formatted_context=context.formatted_context,
        suggestion=(
            PostSuggestionResponse(
                title=suggestion.title,
                content=suggestion.content,
                tag=suggestion.tag,
                link=suggestion.link,
            )
            if suggestion is not None
            else None
        ),
        user=ContextUserResponse(id=user.id, username=user.username) if user else None,
        system_prompt=prompt_builder.build(context),
    )
