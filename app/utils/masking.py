# app/utils/masking.py

from app.models.users import User
from app.schemas.users import MaskedUserInfo

MASK_CHAR = "*"


def mask_account_number(account_number: str) -> str:
    """
    Hide all but the last 4 characters of an account number.
    The mask width is fixed, so the result never reveals the real length.
    """
    if len(account_number) > 4:
        return MASK_CHAR * 12 + account_number[-4:]
    return MASK_CHAR * 4


def to_masked_user_info(user: User) -> MaskedUserInfo:
    return MaskedUserInfo(
        id=user.id,
        masked_account_number=mask_account_number(user.account_number),
        ifsc_code=user.ifsc_code,
        bank_name=user.bank_name,
        branch=user.branch,
        address=user.address,
        city=user.city,
        state_code=user.state_code,
        routing_no=user.routing_no,
        created_at=user.created_at,
    )
