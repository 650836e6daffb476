import logging
from fastapi import Depends
from asktrack.core.exceptions import MissingBranchClaim
from asktrack.core.security import decode_access_token

logger = logging.getLogger(__name__)

def get_token_branch(token: dict = Depends(decode_access_token)) -> str:
    """Филиал из токена. Без него к инвентарю не пускаем."""
    branch = token.get("branch")
    if not isinstance(branch, str) or not branch.strip():
        logger.warning("Branch not found in JWT token for installer %s", token.get("Int_number"))
        raise MissingBranchClaim()
    return branch
