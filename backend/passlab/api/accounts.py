from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from passlab.api.deps import get_store
from passlab.database import CredentialStore
from passlab.services import accounts

router = APIRouter(tags=["accounts"])


class CredentialsRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class AccountSummary(BaseModel):
    id: int
    username: str


class SignupResponse(BaseModel):
    message: str
    user: AccountSummary


class LoginResponse(BaseModel):
    message: str
    username: str


@router.post("/signup", response_model=SignupResponse, status_code=201)
async def signup(body: CredentialsRequest, store: CredentialStore = Depends(get_store)):
    account = await run_in_threadpool(
        accounts.create_account, store, body.username, body.password
    )
    return SignupResponse(
        message="Account created! 🎉",
        user=AccountSummary(id=account.id, username=account.username),
    )


@router.post("/login", response_model=LoginResponse)
async def login(body: CredentialsRequest, store: CredentialStore = Depends(get_store)):
    account = await run_in_threadpool(
        accounts.verify_credentials, store, body.username, body.password
    )
    return LoginResponse(message="Login successful! 🔓", username=account.username)
