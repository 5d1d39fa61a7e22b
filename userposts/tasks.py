import logging

from celery import Celery
from faker import Faker
from sqlalchemy import func, select

from . import database, models
from .core.config import get_settings

logger = logging.getLogger(__name__)

# Configurar Celery
celery_app = Celery("userposts", broker=get_settings().CELERY_BROKER_URL)


def get_db():
    if database.engine is None:
        database.init_engine(get_settings().database_url)
    return database.SessionLocal()


@celery_app.task(name="reconcile_post_counts")
def reconcile_post_counts():
    """Recalcula users.post_count a partir da tabela posts"""
    db = get_db()
    try:
        actual = (
            select(func.count(models.Post.id))
            .where(models.Post.user_id == models.User.id)
            .scalar_subquery()
        )
        result = db.execute(models.User.__table__.update().values(post_count=actual))
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info("Reconciled post_count for %d users", result.rowcount)
    return result.rowcount


@celery_app.task(name="generate_sample_data")
def generate_sample_data(num_users=10, posts_per_user=5):
    """Gera usuários e posts falsos com post_count consistente"""
    fake = Faker()
    db = get_db()
    try:
        users = [
            models.User(
                name=fake.name(),
                mobile_number=fake.unique.random_number(digits=10, fix_len=True),
                address=fake.address(),
                post_count=posts_per_user,
            )
            for _ in range(num_users)
        ]
        db.add_all(users)
        db.flush()

        posts_data = [{
            "title": fake.sentence(nb_words=6),
            "description": fake.text(max_nb_chars=200),
            "user_id": user.id,
            "images": [fake.image_url() for _ in range(fake.random_int(0, 3))],
        } for user in users for _ in range(posts_per_user)]

        if posts_data:
            db.execute(models.Post.__table__.insert(), posts_data)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

    logger.info("Generated %d users with %d posts each", num_users, posts_per_user)
    return len(posts_data)
