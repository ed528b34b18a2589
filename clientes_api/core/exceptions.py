class ClienteError(Exception):
    """Base class for every error raised by the clientes service."""


class ClienteValidationError(ClienteError):
    def __init__(self, field: str = "nombre"):
        self.field = field
        super().__init__(f"Falta el campo '{field}'")


class ClienteNotFoundError(ClienteError):
    def __init__(self, cliente_id=None):
        self.cliente_id = cliente_id
        super().__init__("Cliente no encontrado")


class StorageError(ClienteError):
    """The backing file could not be read or written."""


class StorageParseError(StorageError):
    """The backing file does not hold a JSON array."""
