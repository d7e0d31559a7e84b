#
# Copyright 2024 gprpublish Project Authors. All rights reserved.
# Use of this source code is governed by a MIT-style
# license that can be found at
#
# https://opensource.org/license/MIT
#
# The above copyright notice and this permission
# notice shall be included in all copies or
# substantial portions of the Software.

"""Arguments and error reporting shared by the subcommands."""

import argparse

from gprpublish.utils.console import print_error, print_warning
from gprpublish.utils.context.context import CliContext
from gprpublish.utils.context.namespace import CliNameSpace
from gprpublish.utils.maven import MavenConfig, PublishError


def add_project_arguments(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--project-dir",
        type=str,
        default=None,
        help="Project root containing the properties file (default: current directory)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="TOML configuration file (default: publish.toml in the project root, if present)",
    )
    parser.add_argument(
        "--properties",
        type=str,
        default=None,
        help="Properties file with gpr.usr and gpr.key (default: github.properties)",
    )
    parser.add_argument(
        "--artifact",
        type=str,
        default=None,
        help="Prebuilt artifact to publish (default: source/paymenttools-sdk-release.aar)",
    )
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Maven repository URL",
    )
    parser.add_argument(
        "--publish-version",
        type=str,
        default=None,
        help="Version to publish, overriding the configured one",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed information",
    )


def load_maven_config(context: CliContext, args: CliNameSpace) -> MavenConfig:
    project_dir = args.project_dir or context.project_dir
    maven_config = MavenConfig.from_project(project_dir, args.config)
    maven_config.apply_overrides(
        version=args.publish_version,
        properties=args.properties,
        url=args.url,
        artifact=args.artifact,
    )
    return maven_config


def report_error(error: PublishError) -> int:
    """Print a failure and return the process exit code for it."""
    print_error(str(error))
    if error.hint:
        print_warning(error.hint)
    return error.exit_code
