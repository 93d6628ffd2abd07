"""Post creation."""

from sqlalchemy.orm import Session

from app.models import Post


def create_post(session: Session, author_id: int, title: str, content: str, image: str) -> Post:
    """Persist a post whose image has already been stored."""
    post = Post(title=title, content=content, image=image, user_id=author_id)
    session.add(post)
    session.commit()
    session.refresh(post)
    return post
