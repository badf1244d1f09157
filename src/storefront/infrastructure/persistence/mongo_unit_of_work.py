"""MongoDB implementation of UnitOfWork.

Wraps a client session with a multi-document transaction.  Repositories
pull the session out of the unit of work they are handed, so every read
and write of one order placement runs in the same transaction.
"""

from __future__ import annotations

import logging

from pymongo import MongoClient
from pymongo.client_session import ClientSession
from pymongo.errors import PyMongoError
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.mongo_support import storage_errors

logger = logging.getLogger(__name__)


class MongoUnitOfWork(UnitOfWork):

    def __init__(self, client: MongoClient) -> None:
        self._client = client
        self._session: ClientSession | None = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError("Unit of work is not active")
        return self._session

    # --- UnitOfWork interface -------------------------------------------------

    def begin(self) -> None:
        if self._session is not None:
            raise RuntimeError("Unit of work already started")
        with storage_errors("start transaction"):
            session = self._client.start_session()
            try:
                session.start_transaction(
                    read_concern=ReadConcern("snapshot"),
                    write_concern=WriteConcern("majority"),
                )
            except PyMongoError:
                session.end_session()
                raise
        self._session = session

    def commit(self) -> None:
        session = self.session
        try:
            with storage_errors("commit transaction"):
                session.commit_transaction()
        finally:
            self._end()

    def abort(self) -> None:
        if self._session is None:
            return
        try:
            if self._session.in_transaction:
                self._session.abort_transaction()
        except PyMongoError:
            # The server discards the transaction once the session ends.
            logger.warning("Transaction abort failed; relying on server-side cleanup", exc_info=True)
        finally:
            self._end()

    # --- Internal helpers -----------------------------------------------------

    def _end(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            session.end_session()


def session_of(uow: UnitOfWork | None) -> ClientSession | None:
    """The pymongo session behind *uow*, or None outside a unit of work."""
    if uow is None:
        return None
    if not isinstance(uow, MongoUnitOfWork):
        raise TypeError(f"Expected MongoUnitOfWork, got {type(uow).__name__}")
    return uow.session
