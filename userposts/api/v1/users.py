import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ... import models
from ...core.errors import BadRequestError, ConflictError, StorageError, is_unique_violation
from ...database import get_db
from .posts import PostResponse

logger = logging.getLogger(__name__)

router = APIRouter()

# Só dígitos ASCII: int() aceitaria "1_0" e dígitos Unicode
USER_ID_PATTERN = re.compile(r"-?[0-9]+")


class UserCreate(BaseModel):
    name: str
    mobile_number: int = Field(ge=models.BIGINT_MIN, le=models.BIGINT_MAX)
    address: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    name: str
    mobile_number: int
    address: Optional[str] = None
    post_count: int

    class Config:
        from_attributes = True


class UserCreated(BaseModel):
    message: str
    user: UserResponse


def parse_user_id(raw: str) -> int:
    """Converte o segmento da URL em inteiro antes de qualquer acesso ao banco"""
    if not USER_ID_PATTERN.fullmatch(raw):
        raise BadRequestError("Invalid user ID")
    user_id = int(raw)
    if not models.BIGINT_MIN <= user_id <= models.BIGINT_MAX:
        raise BadRequestError("Invalid user ID")
    return user_id


@router.post("", response_model=UserCreated, status_code=201)
def create_user(user: UserCreate, db: Session = Depends(get_db)):
    """
    Cria um novo usuário com post_count = 0
    """
    db_user = models.User(
        name=user.name,
        mobile_number=user.mobile_number,
        address=user.address,
        post_count=0,
    )
    db.add(db_user)
    try:
        db.commit()
        db.refresh(db_user)
    except IntegrityError as e:
        db.rollback()
        if is_unique_violation(e):
            logger.warning("Duplicate mobile number %s", user.mobile_number)
            raise ConflictError("Mobile number already exists")
        logger.exception("Failed to create user")
        raise StorageError()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create user")
        raise StorageError()

    logger.info("User %s created", db_user.id)
    return UserCreated(message="User created", user=UserResponse.model_validate(db_user))


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    """
    Retorna todos os usuários, na ordem padrão do banco
    """
    try:
        return db.query(models.User).all()
    except SQLAlchemyError:
        logger.exception("Failed to list users")
        raise StorageError()


@router.get("/{user_id}/posts", response_model=List[PostResponse])
def list_user_posts(user_id: str, db: Session = Depends(get_db)):
    """
    Retorna os posts de um usuário (lista vazia se não houver nenhum)
    """
    owner_id = parse_user_id(user_id)
    try:
        return db.query(models.Post).filter(models.Post.user_id == owner_id).all()
    except SQLAlchemyError:
        logger.exception("Failed to list posts for user %s", owner_id)
        raise StorageError()
