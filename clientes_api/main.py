from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pathlib import Path
import logging

from clientes_api.core.config import settings
from clientes_api.core.middleware import RequestLoggingMiddleware
from clientes_api.api import clientes, health
from clientes_api.api.clientes import ERROR_JSON

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(clientes.router)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    # Only the JSON body can fail validation; path ids are taken as raw strings
    logger.warning(f"Rejected malformed body on {request.method} {request.url.path}")
    return JSONResponse(status_code=400, content={"error": ERROR_JSON})


@app.on_event("startup")
async def startup_event():
    data_file = Path(settings.DATA_FILE)
    if data_file.exists():
        logger.info(f"Using clientes file: {data_file.resolve()}")
    else:
        logger.warning(f"Clientes file not found: {data_file.resolve()}. Requests will fail until it exists.")
    print(f"✅ Servidor corriendo en http://localhost:{settings.PORT}")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
