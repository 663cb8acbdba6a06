from fastapi.responses import JSONResponse

from forceclass.services.exceptions import RecordNotFoundError


async def record_not_found_handler(request, exc: RecordNotFoundError):
    return JSONResponse(
        status_code=404,
        content={
            "error": "Not Found",
            "message": str(exc),
            "key": exc.key,
        },
    )
