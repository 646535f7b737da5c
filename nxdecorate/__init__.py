"""nx-decorate — route Angular CLI invocations through the Nx CLI."""

__version__ = "0.1.0"
