"""Taxonomía de errores del cliente Lightning.

Reglas:
- `ConfigurationError` se lanza de forma síncrona al construir el cliente.
- `CredentialReadError` y `TransportError` se propagan sin reintentos.
- `UnsupportedOperation` se lanza antes de cualquier actividad de red.
- "No encontrado" no es un error: las operaciones devuelven `None`.
"""

from __future__ import annotations


class LightningClientError(Exception):
    """Base de todos los errores del cliente."""


class ConfigurationError(LightningClientError, ValueError):
    """Endpoint o credenciales mal formados."""


class CredentialReadError(LightningClientError, OSError):
    """No se pudo leer el fichero de cookie en el momento de usarlo."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read cookie file {path!r}: {reason}")
        self.path = path


class TransportError(LightningClientError):
    """Fallo HTTP/WebSocket: status no exitoso o conexión fallida."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnsupportedOperation(LightningClientError, NotImplementedError):
    """El backend no implementa esta capacidad."""

    def __init__(self, operation: str, backend: str) -> None:
        super().__init__(f"{operation} is not supported by the {backend} backend")
        self.operation = operation
        self.backend = backend


class InvoiceStatusError(LightningClientError, ValueError):
    """Token de estado desconocido para la tabla de normalización."""

    def __init__(self, status: str) -> None:
        super().__init__(f"Invoice status {status!r} is not supported")
        self.status = status
