from pydantic import BaseModel, ConfigDict
from typing import Any

class Cliente(BaseModel):
    # Callers may attach any extra fields; they are stored as sent.
    model_config = ConfigDict(extra="allow")

    id: int
    nombre: Any

class ErrorResponse(BaseModel):
    error: str

class MensajeResponse(BaseModel):
    mensaje: str
