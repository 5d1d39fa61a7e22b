from sqlalchemy import JSON, BigInteger, Column, ForeignKey, Integer, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()

# Faixa de BIGINT (PostgreSQL) e INTEGER (SQLite)
BIGINT_MIN = -2**63
BIGINT_MAX = 2**63 - 1


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False)
    mobile_number = Column(BigInteger, unique=True, nullable=False)
    address = Column(Text)
    post_count = Column(Integer, default=0, server_default=text("0"))

    posts = relationship("Post", back_populates="user", passive_deletes=True)


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), index=True)
    images = Column(JSON().with_variant(JSONB(), "postgresql"), default=list)

    user = relationship("User", back_populates="posts")
