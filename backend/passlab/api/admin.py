"""Hash dump page.

Deliberately unauthenticated: it exists so the stored digests can be
inspected and fed to a cracker.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse

from passlab.api.deps import get_store
from passlab.database import CredentialStore
from passlab.services import accounts
from passlab.templating import templates

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/hashes", response_class=HTMLResponse)
async def list_hashes(request: Request, store: CredentialStore = Depends(get_store)):
    rows = await run_in_threadpool(accounts.list_accounts, store)
    return templates.TemplateResponse(request, "hashes.html", {"accounts": rows})
