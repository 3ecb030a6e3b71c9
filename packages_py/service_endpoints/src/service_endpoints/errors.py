"""Exceptions raised while building the registry or loading endpoint configuration."""
from typing import List, Optional


class ServiceEndpointsError(Exception):
    """Base exception for service endpoint configuration errors."""
    pass


class RegistryValidationError(ServiceEndpointsError):
    """Raised when service registry data is malformed."""
    pass


class AliasCollisionError(RegistryValidationError):
    def __init__(self, key: str, services: List[str]):
        msg = f"Service key '{key}' is claimed by more than one service: {', '.join(services)}"
        super().__init__(msg)
        self.key = key
        self.services = services


class ServiceNotFoundError(ServiceEndpointsError):
    def __init__(self, key: str):
        super().__init__(f"Service '{key}' is not registered")
        self.key = key


class ConfigLoadError(ServiceEndpointsError):
    def __init__(self, path: str, cause: Optional[Exception] = None):
        msg = f"Failed to load endpoint configuration from {path}"
        if cause is not None:
            msg = f"{msg}: {cause}"
        super().__init__(msg)
        self.path = path
        self.cause = cause
