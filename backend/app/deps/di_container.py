"""
Dependency injection container using dependency-injector.
Wires the form registry, services and controllers.
"""

from dependency_injector import containers, providers

from app.forms.registry import FormRegistry
from app.services.health_service import HealthService
from app.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Open client forms live for the lifetime of the process
    form_registry = providers.Singleton(
        FormRegistry,
    )

    # Services
    health_service = providers.Singleton(
        HealthService,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
    return _container
