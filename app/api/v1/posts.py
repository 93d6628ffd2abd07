"""Post endpoint: multipart form with title, content and an image file."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import get_current_identity
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import FileStorageError
from app.schemas.auth import TokenClaims
from app.schemas.posts import PostRead
from app.services.files import (
    ALLOWED_IMAGE_EXTENSIONS,
    delete_image,
    image_extension,
    save_image,
)
from app.services.posts import create_post

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
def post_create(
    title: Annotated[str, Form(min_length=1, max_length=255)],
    content: Annotated[str, Form(min_length=1)],
    image: UploadFile,
    db: Annotated[Session, Depends(get_db)],
    identity: Annotated[TokenClaims, Depends(get_current_identity)],
) -> PostRead:
    """Create a post authored by the caller. The image is served under STATIC_URL_PATH."""
    if image_extension(image.filename) not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=422,
            detail=f"Image must be one of: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}.",
        )
    # Read one byte past the limit to detect oversize uploads without loading them whole.
    data = image.file.read(settings.MAX_IMAGE_BYTES + 1)
    if len(data) > settings.MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds maximum size of {settings.MAX_IMAGE_BYTES} bytes.",
        )
    if not data:
        raise HTTPException(
            status_code=422,
            detail="Image file is empty.",
        )
    try:
        stored_name = save_image(data, image.filename, settings.STATIC_DIR)
    except FileStorageError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    try:
        post = create_post(db, author_id=identity.id, title=title, content=content, image=stored_name)
    except SQLAlchemyError as e:
        db.rollback()
        delete_image(stored_name, settings.STATIC_DIR)
        logger.error("Post insert failed; stored image removed", extra={"stored_name": stored_name})
        raise HTTPException(status_code=500, detail="Could not save post.") from e
    return PostRead.model_validate(post)
