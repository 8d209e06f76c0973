import logging

from fastapi import APIRouter, Depends

from fileshare.core.security import TokenIssuer
from fileshare.dependencies import get_credential_store, get_token_issuer
from fileshare.schemas import Credentials, MessageResponse, TokenResponse
from fileshare.services.credentials import CredentialStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=MessageResponse)
def register(body: Credentials, store: CredentialStore = Depends(get_credential_store)):
    store.register(body.username, body.password)
    return MessageResponse(message="User registered")


@router.post("/login", response_model=TokenResponse)
def login(
    body: Credentials,
    store: CredentialStore = Depends(get_credential_store),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    user_id = store.verify(body.username, body.password)

    # login success → hand out a bearer token
    logger.info("User id=%s logged in", user_id)
    return TokenResponse(token=issuer.issue(user_id))
