"""
Tests for Maven publication configuration.
"""

import os
import tempfile
import unittest
from unittest.mock import patch

from gprpublish.utils.maven.config import (
    ArtifactReference,
    Credentials,
    MavenConfig,
    declare_publication,
    declare_registry_target,
    load_credentials,
)
from gprpublish.utils.maven.errors import ConfigurationError


def write_file(path, content):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(content)


class TestLoadCredentials(unittest.TestCase):
    """Test reading gpr.usr / gpr.key."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.path = os.path.join(self.tmp.name, 'github.properties')

    def test_values_read_back_unchanged(self):
        samples = [
            ('octocat', 'ghp_1234567890abcdef'),
            ('user.name', 'tok=en:with#chars'),
            ('ünï', 'p@ss w0rd'),
        ]
        for username, password in samples:
            with self.subTest(username=username):
                write_file(self.path, f"gpr.usr={username}\ngpr.key={password}\n")
                credentials = load_credentials(self.path)
                self.assertEqual(credentials.username, username)
                self.assertEqual(credentials.password, password)

    def test_other_keys_are_ignored(self):
        write_file(self.path, "sdk.dir=/opt/android\ngpr.usr=a\ngpr.key=b\n")
        self.assertEqual(load_credentials(self.path), Credentials('a', 'b'))

    def test_missing_username(self):
        write_file(self.path, "gpr.key=secret\n")
        with self.assertRaises(ConfigurationError) as context:
            load_credentials(self.path)
        self.assertIn('gpr.usr', str(context.exception))

    def test_missing_password(self):
        write_file(self.path, "gpr.usr=alice\n")
        with self.assertRaises(ConfigurationError) as context:
            load_credentials(self.path)
        self.assertIn('gpr.key', str(context.exception))

    def test_blank_value_is_missing(self):
        write_file(self.path, "gpr.usr=alice\ngpr.key=   \n")
        with self.assertRaises(ConfigurationError):
            load_credentials(self.path)

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_credentials(self.path)

    def test_repr_hides_secrets(self):
        credentials = Credentials('alice', 'top-secret')
        self.assertNotIn('top-secret', repr(credentials))
        self.assertNotIn('alice', repr(credentials))


class TestDeclarations(unittest.TestCase):
    """Test publication and registry target construction."""

    def test_default_publication(self):
        publication = declare_publication()

        self.assertEqual(publication.name, 'release')
        self.assertEqual(publication.identity.group_id, 'com.paymenttools')
        self.assertEqual(publication.identity.artifact_id, 'paymenttoolssdk')
        self.assertEqual(publication.identity.version, '1.0.13')
        self.assertEqual(publication.artifact.path, 'source/paymenttools-sdk-release.aar')
        self.assertEqual(publication.artifact.extension, 'aar')
        self.assertEqual(publication.file_name(), 'paymenttoolssdk-1.0.13.aar')
        self.assertEqual(publication.identity.version_path,
                         'com/paymenttools/paymenttoolssdk/1.0.13')

    def test_publication_does_not_check_artifact(self):
        publication = declare_publication(artifact_path='/does/not/exist.aar')
        self.assertFalse(publication.artifact.exists())

    def test_empty_coordinate_rejected(self):
        with self.assertRaises(ConfigurationError):
            declare_publication(version='')

    def test_registry_target(self):
        target = declare_registry_target(Credentials('a', 'b'))

        self.assertEqual(target.name, 'GithubPackages')
        self.assertEqual(target.url,
                         'https://maven.pkg.github.com/paymenttools/wlp-android-distribution')
        self.assertEqual(target.credentials, Credentials('a', 'b'))

    def test_registry_target_strips_trailing_slash(self):
        target = declare_registry_target(Credentials('a', 'b'), 'https://repo.example.com/maven/')
        self.assertEqual(target.url, 'https://repo.example.com/maven')

    def test_registry_target_rejects_bad_url(self):
        for url in ('ftp://example.com/repo', 'not a url', ''):
            with self.subTest(url=url):
                with self.assertRaises(ConfigurationError):
                    declare_registry_target(Credentials('a', 'b'), url)

    def test_artifact_without_extension_defaults_to_jar(self):
        self.assertEqual(ArtifactReference('build/lib').extension, 'jar')


class TestMavenConfig(unittest.TestCase):
    """Test resolving configuration for a project directory."""

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.project_dir = self.tmp.name
        write_file(os.path.join(self.project_dir, 'github.properties'),
                   "gpr.usr=alice\ngpr.key=secret\n")

    def test_defaults_without_config_file(self):
        publish_config = MavenConfig.from_project(self.project_dir).build()
        identity = publish_config.publication.identity

        self.assertEqual(identity.coordinates, 'com.paymenttools:paymenttoolssdk:1.0.13')
        self.assertEqual(publish_config.publication.artifact.path,
                         os.path.join(os.path.abspath(self.project_dir),
                                      'source/paymenttools-sdk-release.aar'))
        self.assertEqual(publish_config.target.credentials, Credentials('alice', 'secret'))
        self.assertEqual(publish_config.timeout, 60.0)

    def test_publish_toml_overrides(self):
        write_file(os.path.join(self.project_dir, 'publish.toml'), """
[publish.android]
group_id = "com.example"
artifact_id = "demo"
version = "2.0.0"
artifact = "out/demo.aar"
url = "https://repo.example.com/releases"
repository = "Internal"
timeout = 5
""")
        publish_config = MavenConfig.from_project(self.project_dir).build()

        self.assertEqual(publish_config.publication.identity.coordinates, 'com.example:demo:2.0.0')
        self.assertTrue(publish_config.publication.artifact.path.endswith('out/demo.aar'))
        self.assertEqual(publish_config.target.name, 'Internal')
        self.assertEqual(publish_config.target.url, 'https://repo.example.com/releases')
        self.assertEqual(publish_config.timeout, 5.0)
        self.assertEqual(publish_config.pom_name, 'demo')

    def test_environment_expansion(self):
        config = {'publish': {'android': {'version': '${SDK_VERSION}', 'url': 'https://$REPO_HOST/m'}}}
        with patch.dict(os.environ, {'SDK_VERSION': '3.1.4', 'REPO_HOST': 'repo.local'}):
            maven_config = MavenConfig(config, self.project_dir)

        self.assertEqual(maven_config.version, '3.1.4')
        self.assertEqual(maven_config.repo_url, 'https://repo.local/m')

    def test_unknown_variable_left_as_is(self):
        config = {'publish': {'android': {'version': '${NOT_SET_ANYWHERE_42}'}}}
        with patch.dict(os.environ, {}, clear=True):
            maven_config = MavenConfig(config, self.project_dir)
        self.assertEqual(maven_config.version, '${NOT_SET_ANYWHERE_42}')

    def test_overrides(self):
        maven_config = MavenConfig({}, self.project_dir)
        maven_config.apply_overrides(version='1.0.14', url='https://other.example.com/repo')

        publish_config = maven_config.build()
        self.assertEqual(publish_config.publication.identity.version, '1.0.14')
        self.assertEqual(publish_config.target.url, 'https://other.example.com/repo')

    def test_missing_properties_file(self):
        os.remove(os.path.join(self.project_dir, 'github.properties'))
        with self.assertRaises(ConfigurationError):
            MavenConfig.from_project(self.project_dir).build()

    def test_invalid_url_fails_validation(self):
        maven_config = MavenConfig({'publish': {'android': {'url': 'file:///tmp/repo'}}},
                                   self.project_dir)
        is_valid, error_msg = maven_config.validate()
        self.assertFalse(is_valid)
        self.assertIn('Invalid repository URL', error_msg)
        with self.assertRaises(ConfigurationError):
            maven_config.build()

    def test_non_string_value_rejected(self):
        with self.assertRaises(ConfigurationError):
            MavenConfig({'publish': {'android': {'version': 13}}}, self.project_dir)

    def test_invalid_timeout(self):
        with self.assertRaises(ConfigurationError):
            MavenConfig({'publish': {'android': {'timeout': 'soon'}}}, self.project_dir)
        maven_config = MavenConfig({'publish': {'android': {'timeout': 0}}}, self.project_dir)
        self.assertFalse(maven_config.validate()[0])

    def test_malformed_toml(self):
        write_file(os.path.join(self.project_dir, 'publish.toml'), "[publish.android\nversion=")
        with self.assertRaises(ConfigurationError):
            MavenConfig.from_project(self.project_dir)

    def test_explicit_config_missing(self):
        with self.assertRaises(ConfigurationError):
            MavenConfig.from_project(self.project_dir, os.path.join(self.project_dir, 'nope.toml'))

    def test_summary_masks_credentials(self):
        maven_config = MavenConfig({}, self.project_dir)
        publish_config = maven_config.build()
        summary = maven_config.get_config_summary(publish_config.target.credentials)

        self.assertIn('Group ID: com.paymenttools', summary)
        self.assertIn('Username: ***', summary)
        self.assertNotIn('secret', summary)
        self.assertNotIn('alice', summary)


if __name__ == '__main__':
    unittest.main()
