# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Per-operation transaction scope shared by the repositories."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from sqlalchemy.orm import Session

from blog_backend.shared.logging import logger


@dataclass(slots=True)
class SqlAlchemyUnitOfWork:
    """Opens one session, commits on clean exit and rolls back on error."""

    session_factory: Callable[[], Session]
    _session: Session | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        self._session = self.session_factory()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        assert self._session is not None
        try:
            if exc is None:
                self._session.commit()
            else:
                logger.debug(f"uow: rollback ({exc_type.__name__})")
                self._session.rollback()
        except Exception:
            # commit itself failed, e.g. a deferred constraint
            logger.exception("uow: finalising failed")
            self._session.rollback()
            raise
        finally:
            self._session.close()
            self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("unit of work used outside its context")
        return self._session


@contextmanager
def unit_of_work_scope(factory: Callable[[], Session]) -> Iterator[Session]:
    with SqlAlchemyUnitOfWork(factory) as uow:
        yield uow.session
