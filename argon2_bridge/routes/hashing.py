from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from ..errors import Argon2BridgeError, EngineRejected, InvalidParameter
from ..schemas import ErrorResponse, HashingConfig, HashResult

router = APIRouter(tags=["argon2"])

def _error(e: Argon2BridgeError) -> JSONResponse:
    status = 422 if isinstance(e, EngineRejected) else 400
    return JSONResponse(status_code=status, content=ErrorResponse(**e.to_dict()).model_dump())

@router.post(
    "/argon2",
    response_model=HashResult,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def hash_password(request: Request):
    """
    Hash one password. Body keys follow HashingConfig (camelCase as the JS bridge sends them).
    The hash itself runs on the app's worker pool.
    """
    try:
        body = await request.json()
    except ValueError:
        return _error(InvalidParameter("Request body must be a JSON object"))
    if not isinstance(body, dict):
        return _error(InvalidParameter("Request body must be a JSON object"))

    try:
        config = HashingConfig.from_mapping(body)
        return await request.app.state.hash_pool.run(config)
    except Argon2BridgeError as e:
        return _error(e)
