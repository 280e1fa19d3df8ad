from .sqlalchemy_post_repository import SqlAlchemyPostRepository

__all__ = ["SqlAlchemyPostRepository"]
