"""
Deployment bootstrap for OpenObserve: resolves configuration from inline JSON or
AWS Secrets Manager, then launches nginx and the server.
"""

from .errors import BootstrapError
from .models import BootstrapInputs, EnvironmentSet
from .sequencer import BootstrapSequencer, BootstrapState

__all__ = [
    "BootstrapError",
    "BootstrapInputs",
    "BootstrapSequencer",
    "BootstrapState",
    "EnvironmentSet",
]
