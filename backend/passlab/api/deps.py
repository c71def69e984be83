from fastapi import Request

from passlab.database import CredentialStore


def get_store(request: Request) -> CredentialStore:
    return request.app.state.store
