"""Social feed endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from fitfeed.api.dependencies.auth import get_current_user_id, get_optional_user_id
from fitfeed.api.params import page_limit, page_offset
from fitfeed.db.session import get_session
from fitfeed.feed.service import add_comment, list_feed, toggle_like
from fitfeed.schemas import CommentRequest, CommentSchema

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("")
def get_feed(
    limit: str | None = Query(default=None),
    offset: str | None = Query(default=None),
    user_id: str | None = Depends(get_optional_user_id),
) -> dict:
    """Newest-first feed; items carry isLiked when the caller is authenticated."""
    with get_session() as session:
        feed = list_feed(session, user_id=user_id, limit=page_limit(limit, 20), offset=page_offset(offset))
        return {"feed": [item.to_json(exclude_none=True) for item in feed]}


@router.post("/{feed_item_id}/like")
def like(feed_item_id: str, user_id: str = Depends(get_current_user_id)) -> dict:
    """Toggle the caller's like on a feed item."""
    with get_session() as session:
        liked, likes = toggle_like(session, user_id=user_id, feed_item_id=feed_item_id)
        return {"liked": liked, "likes": likes}


@router.post("/{feed_item_id}/comment", status_code=status.HTTP_201_CREATED)
def comment(feed_item_id: str, request: CommentRequest, user_id: str = Depends(get_current_user_id)) -> dict:
    with get_session() as session:
        new_comment, total = add_comment(session, user_id=user_id, feed_item_id=feed_item_id, content=request.content)
        return {"comment": CommentSchema.model_validate(new_comment).to_json(), "totalComments": total}
