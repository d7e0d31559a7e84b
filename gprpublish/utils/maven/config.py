"""
Maven publication configuration for gprpublish.

Resolves the publication identity, the artifact file and the target
repository from built-in defaults, an optional ``publish.toml`` in the
project root and command line overrides.

Configuration structure:
    [publish.android]
    name = "release"               # Publication name
    group_id = "com.paymenttools"  # Maven groupId
    artifact_id = "paymenttoolssdk"
    version = "1.0.13"
    artifact = "source/paymenttools-sdk-release.aar"
    repository = "GithubPackages"  # Repository display name
    url = "https://maven.pkg.github.com/OWNER/REPO"
    properties = "github.properties"
    timeout = 60
    pom_name = "paymenttoolssdk"
    pom_description = "paymenttoolssdk library"
"""

import os
import re
import sys
from dataclasses import dataclass
from typing import Dict, Optional, Any, Tuple
from urllib.parse import urlparse

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .errors import ConfigurationError
from .properties import load_properties

DEFAULT_PUBLICATION_NAME = 'release'
DEFAULT_GROUP_ID = 'com.paymenttools'
DEFAULT_ARTIFACT_ID = 'paymenttoolssdk'
DEFAULT_VERSION = '1.0.13'
DEFAULT_ARTIFACT = 'source/paymenttools-sdk-release.aar'
DEFAULT_REPOSITORY_NAME = 'GithubPackages'
DEFAULT_REPOSITORY_URL = 'https://maven.pkg.github.com/paymenttools/wlp-android-distribution'
DEFAULT_PROPERTIES_FILE = 'github.properties'
DEFAULT_CONFIG_FILE = 'publish.toml'
DEFAULT_TIMEOUT = 60.0

USERNAME_KEY = 'gpr.usr'
PASSWORD_KEY = 'gpr.key'


@dataclass(frozen=True)
class Credentials:
    """Basic auth credentials for the registry."""
    username: str
    password: str

    def __repr__(self) -> str:
        return "Credentials(username='***', password='***')"


@dataclass(frozen=True)
class PublicationIdentity:
    """Maven coordinates of a publication."""
    group_id: str
    artifact_id: str
    version: str

    @property
    def coordinates(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"

    @property
    def artifact_base_path(self) -> str:
        """Repository path of the artifact, without version."""
        return f"{self.group_id.replace('.', '/')}/{self.artifact_id}"

    @property
    def version_path(self) -> str:
        """Repository path of this version's directory."""
        return f"{self.artifact_base_path}/{self.version}"


@dataclass(frozen=True)
class ArtifactReference:
    """A prebuilt binary on disk. Contents are opaque."""
    path: str

    @property
    def extension(self) -> str:
        ext = os.path.splitext(self.path)[1]
        return ext[1:] if ext else 'jar'

    def exists(self) -> bool:
        return os.path.isfile(self.path)


@dataclass(frozen=True)
class Publication:
    """One publication: identity plus artifact."""
    name: str
    identity: PublicationIdentity
    artifact: ArtifactReference

    def file_name(self, extension: Optional[str] = None) -> str:
        ext = extension or self.artifact.extension
        return f"{self.identity.artifact_id}-{self.identity.version}.{ext}"


@dataclass(frozen=True)
class RegistryTarget:
    """Remote Maven repository endpoint."""
    name: str
    url: str
    credentials: Credentials


@dataclass(frozen=True)
class PublishConfig:
    """Everything a publish run needs, built once and passed explicitly."""
    project_dir: str
    publication: Publication
    target: RegistryTarget
    pom_name: str
    pom_description: str
    timeout: float = DEFAULT_TIMEOUT


def load_credentials(properties_path: str) -> Credentials:
    """
    Read registry credentials from a properties file.

    Raises:
        ConfigurationError: If the file is missing or unreadable, or if
            ``gpr.usr`` or ``gpr.key`` is absent or blank
    """
    properties = load_properties(properties_path)

    missing = [key for key in (USERNAME_KEY, PASSWORD_KEY)
               if not properties.get(key, '').strip()]
    if missing:
        raise ConfigurationError(
            f"Missing required key(s) {', '.join(missing)} in {properties_path}"
        )

    return Credentials(username=properties[USERNAME_KEY], password=properties[PASSWORD_KEY])


def declare_publication(group_id: str = DEFAULT_GROUP_ID,
                        artifact_id: str = DEFAULT_ARTIFACT_ID,
                        version: str = DEFAULT_VERSION,
                        artifact_path: str = DEFAULT_ARTIFACT,
                        name: str = DEFAULT_PUBLICATION_NAME) -> Publication:
    """Build a publication. The artifact file is not checked here."""
    for field_name, value in (('group_id', group_id), ('artifact_id', artifact_id),
                              ('version', version), ('artifact', artifact_path)):
        if not value or not str(value).strip():
            raise ConfigurationError(f"Publication field '{field_name}' must not be empty")

    identity = PublicationIdentity(group_id=group_id, artifact_id=artifact_id, version=version)
    return Publication(name=name, identity=identity, artifact=ArtifactReference(artifact_path))


def declare_registry_target(credentials: Credentials,
                            url: str = DEFAULT_REPOSITORY_URL,
                            name: str = DEFAULT_REPOSITORY_NAME) -> RegistryTarget:
    """Build the registry target from a URL and loaded credentials."""
    parsed = urlparse(url)
    if parsed.scheme not in ('http', 'https') or not parsed.netloc:
        raise ConfigurationError(f"Invalid repository URL: {url}")
    return RegistryTarget(name=name, url=url.rstrip('/'), credentials=credentials)


class MavenConfig:
    """Handle Maven publication configuration for one project."""

    def __init__(self, config: Dict[str, Any], project_dir: str):
        """
        Initialize Maven configuration.

        Args:
            config: Configuration dictionary, usually from publish.toml
            project_dir: Root directory of the project
        """
        self.project_dir = os.path.abspath(project_dir)
        self.raw_config = config

        publish_config = config.get('publish', {})
        self.maven_config = publish_config.get('android', {})
        if not isinstance(self.maven_config, dict):
            raise ConfigurationError("[publish.android] must be a table")

        self.publication_name = self._get('name', DEFAULT_PUBLICATION_NAME)
        self.group_id = self._get('group_id', DEFAULT_GROUP_ID)
        self.artifact_id = self._get('artifact_id', DEFAULT_ARTIFACT_ID)
        self.version = self._get('version', DEFAULT_VERSION)
        self.artifact = self._get('artifact', DEFAULT_ARTIFACT)

        self.repository_name = self._get('repository', DEFAULT_REPOSITORY_NAME)
        self.repo_url = self._get('url', DEFAULT_REPOSITORY_URL)
        self.properties_file = self._get('properties', DEFAULT_PROPERTIES_FILE)

        try:
            self.timeout = float(self.maven_config.get('timeout', DEFAULT_TIMEOUT))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid timeout: {self.maven_config.get('timeout')!r}")

        self.pom_name = self._get('pom_name', self.artifact_id)
        self.pom_description = self._get('pom_description', f"{self.artifact_id} library")

    def _get(self, key: str, default: str) -> str:
        value = self.maven_config.get(key, default)
        if not isinstance(value, str):
            raise ConfigurationError(f"[publish.android] {key} must be a string")
        return self._expand_env(value)

    def _expand_env(self, value: str) -> str:
        """
        Expand environment variables in configuration values.

        Supports ${VAR_NAME} and $VAR_NAME syntax.
        """
        pattern1 = re.compile(r'\$\{([^}]+)\}')
        value = pattern1.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

        pattern2 = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
        value = pattern2.sub(lambda m: os.environ.get(m.group(1), m.group(0)), value)

        return value

    def resolve_path(self, path: str) -> str:
        """Resolve a path relative to the project root."""
        if os.path.isabs(path):
            return path
        return os.path.join(self.project_dir, path)

    @property
    def properties_path(self) -> str:
        return self.resolve_path(self.properties_file)

    @property
    def artifact_path(self) -> str:
        return self.resolve_path(self.artifact)

    def apply_overrides(self, version: Optional[str] = None,
                        properties: Optional[str] = None,
                        url: Optional[str] = None,
                        artifact: Optional[str] = None):
        """Apply command line overrides on top of the file configuration."""
        if version:
            self.version = version
        if properties:
            self.properties_file = properties
        if url:
            self.repo_url = url
        if artifact:
            self.artifact = artifact

    def validate(self) -> Tuple[bool, str]:
        """
        Validate the configuration without touching credentials or the network.

        Returns:
            Tuple of (is_valid, error_message)
        """
        try:
            declare_publication(self.group_id, self.artifact_id, self.version,
                                self.artifact, self.publication_name)
            declare_registry_target(Credentials('', ''), self.repo_url, self.repository_name)
        except ConfigurationError as e:
            return False, str(e)

        if self.timeout <= 0:
            return False, f"Timeout must be positive, got {self.timeout}"

        return True, ""

    def build(self) -> PublishConfig:
        """
        Assemble the publish configuration.

        Credentials are loaded here, once.

        Raises:
            ConfigurationError: If the configuration or credentials are invalid
        """
        is_valid, error_msg = self.validate()
        if not is_valid:
            raise ConfigurationError(error_msg)

        credentials = load_credentials(self.properties_path)
        publication = declare_publication(
            self.group_id, self.artifact_id, self.version,
            self.artifact_path, self.publication_name,
        )
        target = declare_registry_target(credentials, self.repo_url, self.repository_name)

        return PublishConfig(
            project_dir=self.project_dir,
            publication=publication,
            target=target,
            pom_name=self.pom_name,
            pom_description=self.pom_description,
            timeout=self.timeout,
        )

    def get_config_summary(self, credentials: Optional[Credentials] = None) -> str:
        """Get a summary of the configuration for display."""
        lines = []
        lines.append(f"  Publication: {self.publication_name}")
        lines.append(f"  Group ID: {self.group_id}")
        lines.append(f"  Artifact ID: {self.artifact_id}")
        lines.append(f"  Version: {self.version}")
        lines.append(f"  Artifact: {self.artifact_path}")
        lines.append(f"  Repository: {self.repository_name}")
        lines.append(f"  Repository URL: {self.repo_url}")
        lines.append(f"  Properties: {self.properties_path}")
        lines.append(f"  Username: {'***' if credentials and credentials.username else 'Not loaded'}")
        lines.append(f"  Password: {'***' if credentials and credentials.password else 'Not loaded'}")
        return '\n'.join(lines)

    @classmethod
    def from_project(cls, project_dir: str, config_path: Optional[str] = None) -> 'MavenConfig':
        """
        Create MavenConfig for a project directory.

        Args:
            project_dir: Root directory of the project
            config_path: Explicit configuration file. When omitted,
                publish.toml in the project root is used if present.

        Raises:
            ConfigurationError: If an explicit config file is missing or
                any config file cannot be parsed
        """
        if config_path is None:
            candidate = os.path.join(project_dir, DEFAULT_CONFIG_FILE)
            config_path = candidate if os.path.isfile(candidate) else None
        elif not os.path.isfile(config_path):
            raise ConfigurationError(f"Config file not found: {config_path}")

        config = {}
        if config_path:
            try:
                with open(config_path, 'rb') as f:
                    config = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                raise ConfigurationError(f"Cannot load {config_path}: {e}")

        return cls(config, project_dir)
