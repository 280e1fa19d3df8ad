from .sqlalchemy_user_repository import SqlAlchemySessionRepository, SqlAlchemyUserRepository

__all__ = ["SqlAlchemySessionRepository", "SqlAlchemyUserRepository"]
