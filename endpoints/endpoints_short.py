from fastapi import APIRouter

from endpoints.endpoints_notes import noteStoreDep
from services.short_links import ShortLinkResolver

router_short = APIRouter(prefix="/short", tags=["Sharing"])


@router_short.get(
    "/{short_url}",
    description="No token needed. Returns the shared note, with content blanked if it is password protected",
    summary="Open short link",
)
async def open_short_link(short_url: str, store: noteStoreDep):
    note = await ShortLinkResolver(store).resolve(short_url)

    return {"success": True, "note": note.to_json(), "message": "Note found"}
