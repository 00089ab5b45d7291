"""Feed reads, likes and comments.

Like and comment counters on FeedItem are best-effort mirrors of the row
counts: the existence check and the counter update are separate statements,
so concurrent toggles on one item can drift the counter.
"""

from __future__ import annotations

from datetime import datetime

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from fitfeed.core.errors import NotFoundError, ValidationError
from fitfeed.db.models import Comment, FeedItem, Like
from fitfeed.feed.synthesizer import load_stats, load_tags
from fitfeed.schemas import FeedItemSchema, FeedStatSchema, FeedTagSchema, FeedUserSchema
from fitfeed.utils.formatting import format_time_ago
from fitfeed.utils.timezone import utcnow


def _get_feed_item(session: Session, feed_item_id: str) -> FeedItem:
    feed_item = session.get(FeedItem, feed_item_id)
    if feed_item is None:
        raise NotFoundError("Feed item not found")
    return feed_item


def serialize_feed_item(item: FeedItem, now: datetime | None = None) -> FeedItemSchema:
    """Client representation of a feed item with parsed tags/stats."""
    now = now or utcnow()
    return FeedItemSchema(
        id=item.id,
        user=FeedUserSchema(id=item.user.id, name=item.user.name, avatar=item.user.avatar or ""),
        time_ago=format_time_ago(item.created_at, now),
        title=item.title,
        tags=[FeedTagSchema(label=t.label, type=t.kind) for t in load_tags(item.tags)],
        description=item.description,
        stats=[FeedStatSchema(label=s.label, value=s.value, unit=s.unit) for s in load_stats(item.stats)],
        likes=item.likes,
        comments=item.comments,
        image=item.image_url,
        map_image=item.map_image_url,
        location=item.location,
        exercises_count=item.exercises_count or None,
        type=item.type,
    )


def list_feed(session: Session, *, user_id: str | None = None, limit: int = 20, offset: int = 0) -> list[FeedItemSchema]:
    """Newest-first page of the feed.

    When user_id is given every item also carries is_liked for that user.
    """
    stmt = (
        select(FeedItem)
        .order_by(FeedItem.created_at.desc())
        .offset(offset)
        .limit(limit)
        .options(selectinload(FeedItem.user))
    )
    items = list(session.execute(stmt).scalars().all())

    now = utcnow()
    feed = [serialize_feed_item(item, now) for item in items]

    if user_id and items:
        liked_ids = set(
            session.execute(
                select(Like.feed_item_id)
                .where(Like.user_id == user_id)
                .where(Like.feed_item_id.in_([item.id for item in items]))
            ).scalars().all()
        )
        for entry in feed:
            entry.is_liked = entry.id in liked_ids

    return feed


def toggle_like(session: Session, *, user_id: str, feed_item_id: str) -> tuple[bool, int]:
    """Like the item, or remove the caller's like if present.

    Returns:
        (liked, current like count)

    Raises:
        NotFoundError: If the feed item does not exist
    """
    feed_item = _get_feed_item(session, feed_item_id)

    existing = session.execute(
        select(Like).where(Like.user_id == user_id).where(Like.feed_item_id == feed_item_id)
    ).scalar_one_or_none()

    if existing is not None:
        session.delete(existing)
        feed_item.likes = max((feed_item.likes or 0) - 1, 0)
        session.flush()
        logger.debug(f"[FEED] Unliked feed_item_id={feed_item_id} user_id={user_id} likes={feed_item.likes}")
        return False, feed_item.likes

    session.add(Like(user_id=user_id, feed_item_id=feed_item_id))
    feed_item.likes = (feed_item.likes or 0) + 1
    session.flush()
    logger.debug(f"[FEED] Liked feed_item_id={feed_item_id} user_id={user_id} likes={feed_item.likes}")
    return True, feed_item.likes


def add_comment(session: Session, *, user_id: str, feed_item_id: str, content: str | None) -> tuple[Comment, int]:
    """Add a comment and bump the item's comment counter.

    Returns:
        (comment, total comments on the item)

    Raises:
        ValidationError: If content is empty after trimming
        NotFoundError: If the feed item does not exist
    """
    text = (content or "").strip()
    if not text:
        raise ValidationError("Comment content is required")

    feed_item = _get_feed_item(session, feed_item_id)

    comment = Comment(user_id=user_id, feed_item_id=feed_item_id, content=text)
    session.add(comment)
    feed_item.comments = (feed_item.comments or 0) + 1
    session.flush()

    logger.debug(f"[FEED] Comment added feed_item_id={feed_item_id} user_id={user_id} total={feed_item.comments}")
    return comment, feed_item.comments
