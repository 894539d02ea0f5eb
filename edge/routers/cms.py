"""CMS credential encrypt/decrypt functions.

``/cms-encrypt`` is called by signed-in users saving CMS credentials.
``/cms-decrypt`` is mostly called service-to-service (publishing jobs) with
the internal secret header, but also accepts a user bearer token.
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from edge.auth.dependencies import require_user, require_user_or_internal
from edge.responses import CORS_HEADERS, json_error, read_json_body
from llumos.cms.crypto import CmsCipher, CmsError, is_encrypted
from llumos.models import AuthenticatedUser

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cms"])

_encryption_key: str = ""


def init_router(encryption_key: str) -> None:
    global _encryption_key  # noqa: PLW0603
    _encryption_key = encryption_key


@router.post("/cms-encrypt")
async def cms_encrypt(
    request: Request,
    user: Annotated[AuthenticatedUser, Depends(require_user)],
) -> JSONResponse:
    body = await read_json_body(request)
    password = body.get("password")
    if not password or not isinstance(password, str):
        return json_error("Password is required", 400)

    logger.info("[cms-encrypt] Encrypting password for user %s", user.id)
    try:
        encrypted = CmsCipher.from_hex(_encryption_key).encrypt(password)
    except CmsError:
        logger.exception("[cms-encrypt] Encryption failed")
        return json_error("Encryption failed", 500)

    return JSONResponse({"encrypted": encrypted}, headers=CORS_HEADERS)


@router.post("/cms-decrypt")
async def cms_decrypt(
    request: Request,
    caller: Annotated[AuthenticatedUser | None, Depends(require_user_or_internal)],
) -> JSONResponse:
    body = await read_json_body(request)
    encrypted = body.get("encrypted")
    if not encrypted or not isinstance(encrypted, str):
        return json_error("Encrypted value is required", 400)

    logger.info(
        "[cms-decrypt] Decrypting value for %s",
        "internal caller" if caller is None else f"user {caller.id}",
    )
    if not is_encrypted(encrypted):
        # Legacy plaintext needs no key
        logger.info("[cms-decrypt] Value not encrypted, returning as-is")
        return JSONResponse({"decrypted": encrypted}, headers=CORS_HEADERS)

    try:
        decrypted = CmsCipher.from_hex(_encryption_key).decrypt(encrypted)
    except CmsError:
        logger.exception("[cms-decrypt] Decryption failed")
        return json_error("Decryption failed", 500)

    return JSONResponse({"decrypted": decrypted}, headers=CORS_HEADERS)
