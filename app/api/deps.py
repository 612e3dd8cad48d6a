from collections.abc import Generator
from typing import Annotated, Any, Dict, List, Optional, Tuple

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from app.core.database import db
from app.core.exceptions import AuthenticationFailed, PermissionDenied, ValidationFailed
from app.core.security import Principal, principal_from_token
from app.schemas.common import form_fields
from app.services.storage import BlobStore


# Bearer scheme; missing credentials are reported by the dependencies below
bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    with db.session() as session:
        yield session


def get_blob_store(request: Request) -> BlobStore:
    return request.app.state.blob_store


# Type dependencies
SessionDep = Annotated[Session, Depends(get_db)]
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]
CredentialsDep = Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)]


def get_current_principal(credentials: CredentialsDep) -> Principal:
    """
    Verify the bearer token and return the caller's identity.
    Missing, malformed or expired tokens are rejected with 401.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationFailed("Authentication token required")
    return principal_from_token(credentials.credentials)


def get_optional_principal(credentials: CredentialsDep) -> Optional[Principal]:
    """Identity when a token is sent, None for anonymous callers."""
    if credentials is None:
        return None
    return principal_from_token(credentials.credentials)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipal = Annotated[Optional[Principal], Depends(get_optional_principal)]


def get_current_admin(principal: CurrentPrincipal) -> Principal:
    """
    Verify the caller holds an administrative role
    """
    if not principal.is_admin:
        raise PermissionDenied("Insufficient privileges. This action requires admin access.")
    return principal


AdminPrincipal = Annotated[Principal, Depends(get_current_admin)]


async def read_image_form(request: Request, max_files: int) -> Tuple[Dict[str, Any], List[UploadFile]]:
    """
    Split a multipart request into its text fields and ``images`` uploads.
    Empty file inputs are ignored.
    """
    form = await request.form()
    uploads = [
        item for item in form.getlist("images")
        if isinstance(item, UploadFile) and item.filename
    ]
    if len(uploads) > max_files:
        raise ValidationFailed(
            f"At most {max_files} images can be uploaded",
            errors=[{"field": "images", "message": f"Too many files (max {max_files})"}],
        )
    return form_fields(form.multi_items()), uploads
