# app/utils/user_store.py

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, StorageError
from app.models.users import User

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_PGCODE = "23505"


def _is_unique_violation(exc: IntegrityError) -> bool:
    if getattr(exc.orig, "pgcode", None) == UNIQUE_VIOLATION_PGCODE:
        return True
    message = str(exc.orig).lower()
    return "unique" in message or "duplicate key" in message


class UserStore:
    """
    Persistence operations for registered users.
    Database errors are logged here and re-raised as StorageError or
    ConflictError, so nothing above this layer sees SQLAlchemy exceptions.
    """

    @staticmethod
    def exists_by_account_number(db: Session, account_number: str) -> bool:
        """Advisory pre-check. insert() is what actually enforces uniqueness."""
        try:
            return db.query(User.id).filter(User.account_number == account_number).first() is not None
        except SQLAlchemyError as e:
            logger.error(f"Database error checking account number: {str(e)}")
            raise StorageError(reason=str(e)) from e

    @staticmethod
    def insert(
        db: Session,
        account_number: str,
        ifsc_code: str,
        bank_name: str,
        branch: str,
        address: Optional[str] = None,
        city: Optional[str] = None,
        state_code: Optional[str] = None,
        routing_no: Optional[str] = None,
    ) -> User:
        user = User(
            account_number=account_number,
            ifsc_code=ifsc_code,
            bank_name=bank_name,
            branch=branch,
            address=address,
            city=city,
            state_code=state_code,
            routing_no=routing_no,
        )
        try:
            db.add(user)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            if not _is_unique_violation(e):
                logger.error(f"Integrity error inserting user: {str(e)}")
                raise StorageError(reason=str(e)) from e
            logger.warning(f"Unique constraint rejected account number insert: {e.orig}")
            raise ConflictError("Account number already registered.", reason=str(e.orig)) from e
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error inserting user: {str(e)}")
            raise StorageError(reason=str(e)) from e
        # outside the mapping above: the row is already committed
        db.refresh(user)
        return user

    @staticmethod
    def find_by_id(db: Session, user_id: UUID) -> Optional[User]:
        try:
            return db.query(User).filter(User.id == user_id).first()
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching user {user_id}: {str(e)}")
            raise StorageError(reason=str(e)) from e

    @staticmethod
    def find_by_account_number(db: Session, account_number: str) -> Optional[User]:
        try:
            return db.query(User).filter(User.account_number == account_number).first()
        except SQLAlchemyError as e:
            logger.error(f"Database error fetching user by account number: {str(e)}")
            raise StorageError(reason=str(e)) from e
