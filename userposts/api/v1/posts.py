import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ... import models
from ...core.errors import StorageError
from ...database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()


class PostCreate(BaseModel):
    title: str
    description: str
    user_id: int = Field(ge=models.BIGINT_MIN, le=models.BIGINT_MAX)
    images: List[str] = []


class PostResponse(BaseModel):
    id: int
    title: str
    description: str
    user_id: int
    images: List[str]

    class Config:
        from_attributes = True


class PostCreated(BaseModel):
    message: str
    post: PostResponse


@router.post("", response_model=PostCreated, status_code=201)
def create_post(post: PostCreate, db: Session = Depends(get_db)):
    """
    Cria um post e incrementa o post_count do autor na mesma transação
    """
    db_post = models.Post(
        title=post.title,
        description=post.description,
        user_id=post.user_id,
        images=post.images,
    )
    db.add(db_post)
    try:
        # flush primeiro: a FK de user_id é verificada antes do UPDATE
        db.flush()
        db.execute(
            models.User.__table__.update()
            .where(models.User.id == post.user_id)
            .values(post_count=models.User.post_count + 1)
        )
        db.commit()
        db.refresh(db_post)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create post for user %s", post.user_id)
        raise StorageError()

    logger.info("Post %s created for user %s", db_post.id, db_post.user_id)
    return PostCreated(message="Post created", post=PostResponse.model_validate(db_post))
