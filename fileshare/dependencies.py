# fileshare/dependencies.py
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fileshare.core.config import Settings
from fileshare.core.exceptions import InvalidToken, Unauthorized
from fileshare.core.security import TokenIssuer
from fileshare.services.credentials import CredentialStore
from fileshare.services.registry import FileRegistry
from fileshare.services.storage import BlobStorage

bearer_scheme = HTTPBearer(auto_error=False)


# --- DB session dependency, one session per request ---
def get_db(request: Request):
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_storage(request: Request) -> BlobStorage:
    return request.app.state.storage


def get_credential_store(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CredentialStore:
    return CredentialStore(db, hash_method=settings.password_hash_method)


def get_file_registry(
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_storage),
) -> FileRegistry:
    return FileRegistry(db, storage)


# --- resolve the caller from the bearer token, before any handler logic ---
def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    issuer: TokenIssuer = Depends(get_token_issuer),
    store: CredentialStore = Depends(get_credential_store),
) -> int:
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    user_id = issuer.verify(credentials.credentials)
    if not store.exists(user_id):
        # validly signed, but the user is gone
        raise InvalidToken()
    return user_id
