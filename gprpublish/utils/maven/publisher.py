"""
Maven publisher for prebuilt Android/JVM artifacts.

Uploads one artifact, its POM and the artifact-level maven-metadata.xml
to a remote Maven repository, with the checksum files Maven clients
expect. Uploads stop at the first failure and are never retried.
"""

from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from gprpublish import __version__
from gprpublish.utils.console import print_info, print_step, print_success
from .config import DEFAULT_TIMEOUT, Publication, PublishConfig, RegistryTarget
from .errors import (
    ArtifactNotFoundError,
    AuthenticationError,
    NetworkError,
    PublishConflictError,
    PublishError,
)
from .pom import CHECKSUM_ALGORITHMS, checksums, generate_pom, merge_metadata_versions

METADATA_FILE = 'maven-metadata.xml'

CONTENT_TYPES = {
    'aar': 'application/octet-stream',
    'jar': 'application/java-archive',
    'pom': 'application/xml',
    'xml': 'application/xml',
}


class Publisher:
    """Capability that pushes one publication to one registry target."""

    def publish(self, publication: Publication, target: RegistryTarget) -> None:
        """
        Publish ``publication`` to ``target``.

        Raises:
            PublishError: On any failure
        """
        raise NotImplementedError


def upload_paths(publication: Publication) -> List[str]:
    """Repository-relative paths written for a publication, in upload order."""
    identity = publication.identity
    base = identity.version_path
    paths = []
    for ext in (publication.artifact.extension, 'pom'):
        file_path = f"{base}/{publication.file_name(ext)}"
        paths.append(file_path)
        paths.extend(f"{file_path}.{algo}" for algo in CHECKSUM_ALGORITHMS)

    metadata_path = f"{identity.artifact_base_path}/{METADATA_FILE}"
    paths.append(metadata_path)
    paths.extend(f"{metadata_path}.{algo}" for algo in CHECKSUM_ALGORITHMS)
    return paths


def _read_artifact(publication: Publication) -> bytes:
    path = publication.artifact.path
    if not publication.artifact.exists():
        raise ArtifactNotFoundError(f"Artifact not found: {path}")
    try:
        with open(path, 'rb') as f:
            return f.read()
    except OSError as e:
        raise ArtifactNotFoundError(f"Artifact not readable: {path} ({e})")


class MavenRepositoryPublisher(Publisher):
    """Publish over HTTP(S) to a Maven repository with basic authentication."""

    def __init__(self,
                 pom_name: Optional[str] = None,
                 pom_description: Optional[str] = None,
                 timeout: float = DEFAULT_TIMEOUT,
                 verbose: bool = False,
                 session: Optional[requests.Session] = None):
        """
        Initialize Maven publisher.

        Args:
            pom_name: <name> of the generated POM (default: artifactId)
            pom_description: <description> of the generated POM
            timeout: Timeout in seconds for each HTTP request
            verbose: Print every upload
            session: Preconfigured session; created per publish when omitted
        """
        self.pom_name = pom_name
        self.pom_description = pom_description
        self.timeout = timeout
        self.verbose = verbose
        self.session = session

    def _create_session(self, target: RegistryTarget) -> requests.Session:
        """Create HTTP session with basic auth and retries disabled."""
        session = requests.Session()

        retry = Retry(
            total=0,
            connect=0,
            read=0,
            status=0,
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry)
        session.mount('http://', adapter)
        session.mount('https://', adapter)

        session.auth = (target.credentials.username, target.credentials.password)
        session.headers.update({'User-Agent': f'gprpublish/{__version__}'})

        return session

    def publish(self, publication: Publication, target: RegistryTarget) -> None:
        data = _read_artifact(publication)
        identity = publication.identity

        owns_session = self.session is None
        session = self.session or self._create_session(target)

        try:
            version_url = f"{target.url}/{identity.version_path}"
            extension = publication.artifact.extension

            self._upload(session, f"{version_url}/{publication.file_name()}", data,
                         CONTENT_TYPES.get(extension, 'application/octet-stream'))

            pom = generate_pom(identity, extension, self.pom_name, self.pom_description)
            self._upload(session, f"{version_url}/{publication.file_name('pom')}",
                         pom.encode('utf-8'), CONTENT_TYPES['pom'])

            metadata_url = f"{target.url}/{identity.artifact_base_path}/{METADATA_FILE}"
            existing = self._fetch(session, metadata_url)
            metadata = merge_metadata_versions(existing, identity)
            self._upload(session, metadata_url, metadata.encode('utf-8'), CONTENT_TYPES['xml'])
        finally:
            if owns_session:
                session.close()

    def _upload(self, session: requests.Session, url: str, data: bytes, content_type: str):
        """Upload a file followed by its checksum files."""
        self._put(session, url, data, content_type)
        for algo, digest in checksums(data).items():
            self._put(session, f"{url}.{algo}", digest.encode('ascii'), 'text/plain')

    def _put(self, session: requests.Session, url: str, data: bytes, content_type: str):
        if self.verbose:
            print_info(f"  PUT {url} ({len(data)} bytes)")
        try:
            response = session.put(url, data=data, headers={'Content-Type': content_type},
                                   timeout=self.timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise NetworkError(f"Cannot reach {url}: {e}")
        except requests.exceptions.RequestException as e:
            raise PublishError(f"Request to {url} failed: {e}")

        self._check_response(response, url)

    def _fetch(self, session: requests.Session, url: str) -> Optional[str]:
        """GET a text file; None when the repository does not have it."""
        if self.verbose:
            print_info(f"  GET {url}")
        try:
            response = session.get(url, timeout=self.timeout)
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
            raise NetworkError(f"Cannot reach {url}: {e}")
        except requests.exceptions.RequestException as e:
            raise PublishError(f"Request to {url} failed: {e}")

        if response.status_code == 404:
            return None
        self._check_response(response, url)
        return response.text

    def _check_response(self, response: requests.Response, url: str):
        status = response.status_code
        if 200 <= status < 300:
            return
        if status in (401, 403):
            raise AuthenticationError(
                f"Registry rejected the credentials (HTTP {status}) for {url}",
                status_code=status,
            )
        if status == 409:
            raise PublishConflictError(f"Version already exists at {url} (HTTP 409)")

        body = (response.text or '').strip()
        if len(body) > 200:
            body = body[:200] + '...'
        raise PublishError(f"Upload to {url} failed: HTTP {status} {body}".rstrip())


class DryRunPublisher(Publisher):
    """Print what would be uploaded without touching the network."""

    def publish(self, publication: Publication, target: RegistryTarget) -> None:
        data = _read_artifact(publication)
        print_info(f"  Dry run: {len(data)} bytes from {publication.artifact.path}")
        for path in upload_paths(publication):
            print_info(f"  would PUT {target.url}/{path}")


def publish_android(config: PublishConfig,
                    publisher: Optional[Publisher] = None,
                    verbose: bool = False) -> None:
    """
    Publish the configured Android artifact.

    Args:
        config: Assembled publish configuration
        publisher: Publisher to use (default: MavenRepositoryPublisher)
        verbose: Enable verbose output

    Raises:
        PublishError: On any failure
    """
    if publisher is None:
        publisher = MavenRepositoryPublisher(
            pom_name=config.pom_name,
            pom_description=config.pom_description,
            timeout=config.timeout,
            verbose=verbose,
        )

    publication = config.publication
    target = config.target

    print_step(f"Publishing {publication.identity.coordinates} to {target.name}")
    publisher.publish(publication, target)
    print_success(f"Published {publication.name} publication to {target.name}")
    print(f"  Coordinates: {publication.identity.coordinates}")
    print(f"  Repository URL: {target.url}")
