# app/routers/auth.py
import logging

from fastapi import APIRouter, Depends, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.core.errors import AuthError, ConflictError
from app.database.database import get_db
from app.models.users import User
from app.schemas.users import (
    ErrorResponse,
    LoginPayload,
    LoginResponse,
    MaskedUserInfo,
    RegisterSuccessResponse,
    RegisterUserPayload,
)
from app.security import authenticate_user, create_access_token, get_current_user
from app.utils.ifsc_api_service import IFSCVerificationAPI, get_ifsc_api
from app.utils.masking import to_masked_user_info
from app.utils.user_store import UserStore
from app.utils.validators import ensure_valid_registration

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterSuccessResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        409: {"model": ErrorResponse, "description": "Account number already exists"},
        502: {"model": ErrorResponse, "description": "External API error"},
    },
)
async def register_user(
    payload: RegisterUserPayload,
    db: Session = Depends(get_db),
    ifsc_api: IFSCVerificationAPI = Depends(get_ifsc_api),
):
    ensure_valid_registration(payload.account_number, payload.ifsc)

    # Fast, friendly rejection. The UNIQUE constraint on insert is the real guard.
    if await run_in_threadpool(UserStore.exists_by_account_number, db, payload.account_number):
        raise ConflictError("Account number already registered.")

    bank_data = await ifsc_api.verify_ifsc(payload.ifsc)

    # the session is only touched from worker threads, never from the event loop
    new_user = await run_in_threadpool(
        UserStore.insert,
        db,
        account_number=payload.account_number,
        ifsc_code=payload.ifsc,
        bank_name=bank_data.bank_name,
        branch=bank_data.bank_branch_name,
        address=bank_data.address,
        city=bank_data.city_and_pincode,
        state_code=bank_data.state_code,
        routing_no=bank_data.routing_no,
    )
    logger.info(f"New user registered with ID: {new_user.id}")

    return RegisterSuccessResponse(message="User registered successfully.", user_id=new_user.id)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials"}},
)
def login_for_access_token(login_data: LoginPayload, db: Session = Depends(get_db)):
    user = authenticate_user(db, login_data.account_number, login_data.ifsc)
    if not user:
        raise AuthError("Invalid credentials", reason="invalid credentials")

    token = create_access_token(user.id)
    logger.info(f"User {user.id} logged in successfully.")
    return LoginResponse(token=token)


@router.get(
    "/auth/info",
    response_model=MaskedUserInfo,
    responses={401: {"model": ErrorResponse, "description": "Unauthorized"}},
)
def user_info(current_user: User = Depends(get_current_user)):
    logger.info(f"Returning info for user {current_user.id}")
    return to_masked_user_info(current_user)
