import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, col, create_engine, select

from passlab.errors import DuplicateUsernameError, StoreError
from passlab.models.account import Account

logger = logging.getLogger(__name__)


class CredentialStore:
    """Pooled access to the ``users`` table.

    One instance is built at startup and handed to the API layer; every
    operation checks a connection out of the pool for its own duration only.
    Driver-level failures never leave this class: a unique-constraint
    violation becomes ``DuplicateUsernameError`` and anything else becomes
    ``StoreError``.
    """

    def __init__(self, url: str | None = None, *, engine: Engine | None = None):
        if engine is None:
            if url is None:
                raise ValueError("Either a database url or an engine is required")
            engine = create_engine(url, echo=False, pool_pre_ping=True)
        self.engine = engine

    def init_schema(self) -> None:
        import passlab.models  # noqa: F401 - register all models with SQLModel metadata

        try:
            SQLModel.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            raise StoreError(f"Could not create schema: {exc}") from exc
        logger.info("Users table ready")

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        with Session(self.engine) as session:
            try:
                yield session
            except IntegrityError:
                session.rollback()
                raise
            except SQLAlchemyError as exc:
                session.rollback()
                raise StoreError(str(exc)) from exc

    def add_account(self, username: str, password_hash: str) -> Account:
        account = Account(username=username, password_hash=password_hash)
        try:
            with self.session() as session:
                session.add(account)
                session.commit()
                session.refresh(account)
                session.expunge(account)
        except IntegrityError as exc:
            raise DuplicateUsernameError() from exc
        return account

    def get_by_username(self, username: str) -> Account | None:
        with self.session() as session:
            return session.exec(
                select(Account).where(Account.username == username)
            ).first()

    def list_accounts(self) -> list[Account]:
        with self.session() as session:
            return list(
                session.exec(
                    select(Account).order_by(
                        col(Account.created_at).desc(), col(Account.id).desc()
                    )
                ).all()
            )

    def dispose(self) -> None:
        self.engine.dispose()
