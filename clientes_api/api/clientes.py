from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from typing import Any, List
import logging

from clientes_api.core.clientes import add_cliente, find_cliente, is_finite_json, parse_id, remove_cliente, validate_cliente
from clientes_api.core.exceptions import ClienteNotFoundError, ClienteValidationError, StorageError
from clientes_api.db.storage import ClienteRepository, get_repository
from clientes_api.schemas.cliente import Cliente, ErrorResponse, MensajeResponse

router = APIRouter()
logger = logging.getLogger(__name__)

# Error bodies returned to callers. Storage failures never expose their cause.
ERROR_LEER = "Error al leer los datos."
ERROR_GUARDAR = "Error al guardar el cliente."
ERROR_ELIMINAR = "Error al eliminar el cliente."
ERROR_JSON = "JSON inválido"


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


def _not_found(e: ClienteNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"mensaje": str(e)})


@router.get(
    "/clientes",
    responses={
        200: {"model": List[Cliente]},
        500: {"model": ErrorResponse}
    }
)
def list_clientes(repo: ClienteRepository = Depends(get_repository)):
    try:
        return repo.load()
    except StorageError:
        logger.exception("Failed to load clientes")
        return _server_error(ERROR_LEER)


@router.post(
    "/clientes",
    status_code=201,
    responses={
        201: {"model": Cliente},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse}
    }
)
def create_cliente(
    payload: Any = Body(None),
    repo: ClienteRepository = Depends(get_repository)
):
    try:
        # Reject before touching the file so a bad request never rewrites it
        validate_cliente(payload)
        if not is_finite_json(payload):
            logger.warning("Rejected cliente with NaN or Infinity values")
            return JSONResponse(status_code=400, content={"error": ERROR_JSON})
        with repo.transaction() as clientes:
            nuevo = add_cliente(clientes, payload)
    except ClienteValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except StorageError:
        logger.exception("Failed to create cliente")
        return _server_error(ERROR_GUARDAR)

    logger.info(f"Cliente created: id={nuevo['id']}")
    return JSONResponse(status_code=201, content=nuevo)


@router.get(
    "/clientes/{cliente_id}",
    responses={
        200: {"model": Cliente},
        404: {"model": MensajeResponse},
        500: {"model": ErrorResponse}
    }
)
def get_cliente(cliente_id: str, repo: ClienteRepository = Depends(get_repository)):
    try:
        return find_cliente(repo.load(), parse_id(cliente_id))
    except ClienteNotFoundError as e:
        return _not_found(e)
    except StorageError:
        logger.exception(f"Failed to read cliente {cliente_id}")
        return _server_error(ERROR_LEER)


@router.delete(
    "/clientes/{cliente_id}",
    responses={
        200: {"model": Cliente},
        404: {"model": MensajeResponse},
        500: {"model": ErrorResponse}
    }
)
def delete_cliente(cliente_id: str, repo: ClienteRepository = Depends(get_repository)):
    target = parse_id(cliente_id)
    try:
        with repo.transaction() as clientes:
            eliminado = remove_cliente(clientes, target)
    except ClienteNotFoundError as e:
        logger.info(f"Delete requested for unknown cliente: {cliente_id}")
        return _not_found(e)
    except StorageError:
        logger.exception(f"Failed to delete cliente {cliente_id}")
        return _server_error(ERROR_ELIMINAR)

    logger.info(f"Cliente deleted: id={eliminado['id']}")
    return eliminado
