"""
Maven repository publishing for gprpublish.

Publishes a prebuilt Android artifact to a remote Maven repository.
"""

from .config import (
    ArtifactReference,
    Credentials,
    MavenConfig,
    Publication,
    PublicationIdentity,
    PublishConfig,
    RegistryTarget,
    declare_publication,
    declare_registry_target,
    load_credentials,
)
from .errors import (
    ArtifactNotFoundError,
    AuthenticationError,
    ConfigurationError,
    NetworkError,
    PublishConflictError,
    PublishError,
)
from .publisher import DryRunPublisher, MavenRepositoryPublisher, Publisher, publish_android

__all__ = [
    'ArtifactReference', 'Credentials', 'MavenConfig', 'Publication',
    'PublicationIdentity', 'PublishConfig', 'RegistryTarget',
    'declare_publication', 'declare_registry_target', 'load_credentials',
    'ArtifactNotFoundError', 'AuthenticationError', 'ConfigurationError',
    'NetworkError', 'PublishConflictError', 'PublishError',
    'DryRunPublisher', 'MavenRepositoryPublisher', 'Publisher', 'publish_android',
]
