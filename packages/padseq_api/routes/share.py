"""GET/POST /share/* - Share link endpoints"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from padseq_core.codec import encode_pattern, extract_encoded, share_url
from padseq_core.editing import PatternStore
from padseq_api.config import settings
from padseq_api.dependencies import get_store, get_url_sync
from padseq_api.services.url_sync import INVALID_PATTERN_URL, UrlSync

logger = logging.getLogger(__name__)

router = APIRouter()


class LoadLinkRequest(BaseModel):
    link: str = Field(description="Share link or bare share string")


@router.get("")
async def get_share_link(store: PatternStore = Depends(get_store)) -> dict[str, Any]:
    """Encode the current pattern as a share link"""
    pattern = store.current
    if pattern is None:
        raise HTTPException(status_code=404, detail="No pattern to share")

    encoded = encode_pattern(pattern)
    if encoded is None:
        raise HTTPException(status_code=413, detail="Failed to encode pattern")

    return {
        "encoded": encoded,
        "url": share_url(settings.public_url, encoded),
        "length": len(encoded),
    }


@router.post("/load")
async def load_share_link(
    req: LoadLinkRequest,
    url_sync: UrlSync = Depends(get_url_sync),
) -> dict[str, Any]:
    """Replace the current pattern with the one carried by a share link"""
    encoded = extract_encoded(req.link)
    if not encoded:
        raise HTTPException(status_code=422, detail=INVALID_PATTERN_URL)

    result = url_sync.load_from_url(share_url(url_sync.address, encoded))
    if not result.success:
        raise HTTPException(status_code=422, detail=result.message)
    return result.to_dict()


@router.get("/address")
async def get_address(url_sync: UrlSync = Depends(get_url_sync)) -> dict[str, Any]:
    """Current synced address (pattern parameter included once edits settle)"""
    return {
        "address": url_sync.address,
        "pending": url_sync.pending,
        "url_check_complete": url_sync.url_check_complete,
    }
