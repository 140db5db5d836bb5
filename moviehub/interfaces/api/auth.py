"""Auth API route: signup and login on a single action-dispatched endpoint."""

import structlog
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from moviehub.application.services.account_service import AccountStore
from moviehub.core.exceptions import AppError, InvalidActionError
from moviehub.domain.schemas.auth import AuthRequest, AuthResponse, UserRead
from moviehub.interfaces.deps import get_account_store

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


def _respond(status_code: int, envelope: AuthResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope.to_content())


@router.post("/auth")
async def auth(request: Request, store: AccountStore = Depends(get_account_store)):
    """Dispatch ``signup`` and ``login``.

    Every outcome, including failures, is answered with a
    ``{success, message?, user?}`` envelope. Hashing and storage calls
    block, so they run in the threadpool.
    """
    try:
        body = AuthRequest.model_validate(await request.json())

        if body.action == "signup":
            user = await run_in_threadpool(store.create_user, body.name, body.email, body.password)
            return _respond(
                status.HTTP_201_CREATED,
                AuthResponse(success=True, user=UserRead.model_validate(user), message="User created successfully"),
            )

        if body.action == "login":
            user = await run_in_threadpool(store.verify_credentials, body.email, body.password)
            return _respond(
                status.HTTP_200_OK,
                AuthResponse(success=True, user=UserRead.model_validate(user), message="Login successful"),
            )

        raise InvalidActionError()

    except AppError as exc:
        logger.info("Auth request rejected", code=exc.__class__.__name__, status_code=exc.status_code)
        return _respond(exc.status_code, AuthResponse(success=False, message=exc.message))
    except Exception:
        logger.exception("Auth error")
        return _respond(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            AuthResponse(success=False, message="Server error"),
        )
