"""
POM, maven-metadata.xml and checksum generation.
"""

import hashlib
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional
from xml.sax.saxutils import escape

from .config import PublicationIdentity

CHECKSUM_ALGORITHMS = ('md5', 'sha1', 'sha256', 'sha512')


def checksums(data: bytes) -> Dict[str, str]:
    """Calculate the checksums Maven repositories expect next to each file."""
    return {algo: hashlib.new(algo, data).hexdigest() for algo in CHECKSUM_ALGORITHMS}


def generate_pom(identity: PublicationIdentity,
                 packaging: str,
                 name: Optional[str] = None,
                 description: Optional[str] = None) -> str:
    """Generate a minimal POM for a publication."""
    name = name or identity.artifact_id
    description = description or f"{identity.artifact_id} library"

    return f"""<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0"
         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
         xsi:schemaLocation="http://maven.apache.org/POM/4.0.0
         http://maven.apache.org/xsd/maven-4.0.0.xsd">
    <modelVersion>4.0.0</modelVersion>

    <groupId>{escape(identity.group_id)}</groupId>
    <artifactId>{escape(identity.artifact_id)}</artifactId>
    <version>{escape(identity.version)}</version>
    <packaging>{escape(packaging)}</packaging>

    <name>{escape(name)}</name>
    <description>{escape(description)}</description>
</project>
"""


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Maven ``lastUpdated`` format: yyyyMMddHHmmss in UTC."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime('%Y%m%d%H%M%S')


def generate_metadata(identity: PublicationIdentity,
                      versions: Iterable[str],
                      last_updated: Optional[str] = None) -> str:
    """
    Generate the artifact-level maven-metadata.xml.

    ``latest`` and ``release`` point at ``identity.version``.
    """
    version_lines = '\n'.join(f"      <version>{escape(v)}</version>" for v in versions)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<metadata>
  <groupId>{escape(identity.group_id)}</groupId>
  <artifactId>{escape(identity.artifact_id)}</artifactId>
  <versioning>
    <latest>{escape(identity.version)}</latest>
    <release>{escape(identity.version)}</release>
    <versions>
{version_lines}
    </versions>
    <lastUpdated>{last_updated or format_timestamp()}</lastUpdated>
  </versioning>
</metadata>
"""


def _children(element, name: str):
    """Direct children matching ``name``, ignoring any XML namespace."""
    return [child for child in element
            if isinstance(child.tag, str) and child.tag.rsplit('}', 1)[-1] == name]


def parse_metadata_versions(xml_text: str) -> List[str]:
    """
    Read the version list from an existing maven-metadata.xml.

    Returns an empty list if the document cannot be parsed.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError:
        return []

    versions = []
    for versioning in _children(root, 'versioning'):
        for container in _children(versioning, 'versions'):
            for v in _children(container, 'version'):
                if v.text and v.text.strip():
                    versions.append(v.text.strip())
    return versions


def merge_metadata_versions(existing_xml: Optional[str],
                            identity: PublicationIdentity,
                            last_updated: Optional[str] = None) -> str:
    """Add ``identity.version`` to existing metadata, or start a new document."""
    versions = parse_metadata_versions(existing_xml) if existing_xml else []
    if identity.version not in versions:
        versions.append(identity.version)
    return generate_metadata(identity, versions, last_updated)
