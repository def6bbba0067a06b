"""Post image serving for ``/posts/<post_dir>/images/<file>`` paths."""

import mimetypes

from fastapi import APIRouter, HTTPException, Path
from fastapi.responses import FileResponse

from postgraph.config import get_settings
from postgraph.services.ingestion.images import IMAGES_DIR, resolve_image_file

router = APIRouter(tags=["images"])

_FILENAME = Path(..., pattern=r"^[^/\\]+$", max_length=255)


def _serve(post_dir: str, filename: str) -> FileResponse:
    image_path = "/".join(p for p in (post_dir.strip("/"), IMAGES_DIR, filename) if p)
    resolved = resolve_image_file(get_settings().content_root, image_path)
    if resolved is None:
        raise HTTPException(status_code=404, detail="Image not found")

    media_type, _ = mimetypes.guess_type(resolved.name)
    return FileResponse(resolved, media_type=media_type or "application/octet-stream")


@router.get("/posts/images/{filename}")
async def get_top_level_post_image(filename: str = _FILENAME):
    """Serve an image belonging to a post at the content root."""
    return _serve("", filename)


@router.get("/posts/{post_dir:path}/images/{filename}")
async def get_post_image(post_dir: str, filename: str = _FILENAME):
    """Serve an image referenced by a post body."""
    return _serve(post_dir, filename)
