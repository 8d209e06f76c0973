# fileshare/services/credentials.py
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from fileshare.core.exceptions import DuplicateUser, InvalidCredentials, UserNotFound
from fileshare.models.database import MAX_ID
from fileshare.models.user import User

logger = logging.getLogger(__name__)


class CredentialStore:
    """Username/password records backed by the ``users`` table."""

    def __init__(self, db: Session, hash_method: str = "scrypt:32768:8:1"):
        self.db = db
        self.hash_method = hash_method

    def register(self, username: str, password: str) -> int:
        """Create a user and return its id.

        Uniqueness is left to the database: a concurrent registration of the
        same name fails on commit with an IntegrityError, which becomes
        DuplicateUser.
        """
        hashed_pw = generate_password_hash(password, method=self.hash_method)

        new_user = User(username=username, password=hashed_pw)
        self.db.add(new_user)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.info("Registration rejected, username taken: %s", username)
            raise DuplicateUser() from e

        logger.info("Registered user %s (id=%s)", username, new_user.id)
        return new_user.id

    def verify(self, username: str, password: str) -> int:
        user = self.db.query(User).filter(User.username == username).first()
        if not user:
            logger.warning("Login failed, unknown username: %s", username)
            raise UserNotFound()

        # check_password_hash compares with hmac.compare_digest
        if not check_password_hash(user.password, password):
            logger.warning("Login failed, bad password for user id=%s", user.id)
            raise InvalidCredentials()

        return user.id

    def exists(self, user_id: int) -> bool:
        if not -MAX_ID - 1 <= user_id <= MAX_ID:
            return False
        return self.db.query(User.id).filter(User.id == user_id).first() is not None
