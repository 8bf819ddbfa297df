from fastapi import APIRouter

from resort.core.config import APP_NAME, APP_VERSION
from resort.models.common import APIResponse

router = APIRouter(tags=["System"])


@router.get("/", response_model=APIResponse)
def root():
    return APIResponse(code=0, msg="ok", data={"msg": f"{APP_NAME}. See /docs for endpoints."})


@router.get("/health", response_model=APIResponse)
def health_check():
    return APIResponse(
        code=0,
        msg="ok",
        data={"status": "healthy", "service": "safari-resort-server", "version": APP_VERSION},
    )
