"""Variant links: symmetric entry relation, read oriented from either side."""

from __future__ import annotations

import logging
import math
import uuid
from datetime import datetime, timezone

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from boli.db.models import Entry, VariantLink
from boli.entries.service import get_entry
from boli.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


async def list_variants_for(db: AsyncSession, entry_id: uuid.UUID) -> list[dict]:
    """Every entry linked to ``entry_id``, with the link's confidence and votes.

    The queried entry may sit on either side of a link; each result describes
    the other side. Order is unspecified.
    """
    await get_entry(db, entry_id)

    links_result = await db.execute(
        select(VariantLink)
        .where(or_(VariantLink.entry1_id == entry_id, VariantLink.entry2_id == entry_id))
        .execution_options(populate_existing=True)
    )
    links = list(links_result.scalars().all())
    if not links:
        return []

    other_ids = {
        link.entry2_id if link.entry1_id == entry_id else link.entry1_id
        for link in links
    }
    others_result = await db.execute(
        select(Entry)
        .where(Entry.id.in_(other_ids))
        .execution_options(populate_existing=True)
    )
    others = {entry.id: entry for entry in others_result.scalars()}

    variants = []
    for link in links:
        other_id = link.entry2_id if link.entry1_id == entry_id else link.entry1_id
        other = others.get(other_id)
        if other is None:
            continue
        variants.append({
            "link_id": link.id,
            "entry_id": other_id,
            "word": other.word,
            "meaning_en": other.meaning_en,
            "meaning_ur": other.meaning_ur,
            "dialect_name": other.dialect.name if other.dialect else None,
            "confidence_score": link.confidence_score,
            "votes_up": link.votes_up,
            "votes_down": link.votes_down,
        })
    return variants


async def create_link(
    db: AsyncSession,
    entry1_id: uuid.UUID,
    entry2_id: uuid.UUID,
    confidence_score: float,
) -> VariantLink:
    """Store an externally produced variant link.

    The confidence score is taken as given; it is never computed here.
    """
    if entry1_id == entry2_id:
        raise ValidationError("An entry cannot be a variant of itself")
    if not math.isfinite(confidence_score) or not 0.0 <= confidence_score <= 1.0:
        raise ValidationError(f"Confidence score must be within [0, 1], got {confidence_score!r}")

    await get_entry(db, entry1_id)
    await get_entry(db, entry2_id)

    existing = await db.execute(
        select(VariantLink.id).where(
            or_(
                and_(VariantLink.entry1_id == entry1_id, VariantLink.entry2_id == entry2_id),
                and_(VariantLink.entry1_id == entry2_id, VariantLink.entry2_id == entry1_id),
            )
        )
    )
    if existing.first() is not None:
        raise ConflictError("These entries are already linked")

    link = VariantLink(
        entry1_id=entry1_id,
        entry2_id=entry2_id,
        confidence_score=confidence_score,
        votes_up=0,
        votes_down=0,
        created_at=datetime.now(timezone.utc),
    )
    db.add(link)
    await db.flush()
    logger.info("Linked entries %s <-> %s (confidence %.2f)", entry1_id, entry2_id, confidence_score)
    return link
