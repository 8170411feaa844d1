"""Variant link endpoints."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from boli.database import get_session
from boli.variants.schemas import (
    CreateLinkRequest,
    LinkResponse,
    VariantResponse,
    VariantsResponse,
)
from boli.variants.service import create_link, list_variants_for

router = APIRouter(prefix="/api/v1", tags=["Variants"])


@router.get("/entries/{entry_id}/variants", response_model=VariantsResponse)
async def variants(entry_id: uuid.UUID, db: AsyncSession = Depends(get_session)):  # noqa: B008
    """List dialect variants of an entry."""
    rows = await list_variants_for(db, entry_id)
    return VariantsResponse(entry_id=entry_id, variants=[VariantResponse(**r) for r in rows])


@router.post("/variant-links", response_model=LinkResponse, status_code=201)
async def link(body: CreateLinkRequest, db: AsyncSession = Depends(get_session)):  # noqa: B008
    """Store a link produced by the external matching process."""
    created = await create_link(db, body.entry1_id, body.entry2_id, body.confidence_score)
    await db.commit()
    return LinkResponse.model_validate(created)
