"""FastAPI dependencies."""

from fastapi import HTTPException, Request

from postgraph.services.content_index import ContentIndex


def get_content_index(request: Request) -> ContentIndex:
    """Return the ContentIndex built for this app instance."""
    index = getattr(request.app.state, "content_index", None)
    if index is None:
        raise HTTPException(status_code=503, detail="Content index not built yet")
    return index
