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

import argparse
import os
import sys

from gprpublish.commands._common import add_project_arguments, load_maven_config, report_error
from gprpublish.utils.console import print_step, print_success
from gprpublish.utils.context.command import CliCommand
from gprpublish.utils.context.context import CliContext
from gprpublish.utils.context.namespace import CliNameSpace
from gprpublish.utils.maven import ArtifactNotFoundError, PublishError


class Check(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to check the publish configuration without uploading.

        It loads the configuration and the credentials and verifies that the
        artifact file exists. No network access is made.

        Examples:
            gprpublish check
            gprpublish check --project-dir ../sdk
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="gprpublish check",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_project_arguments(parser)
        if argv is None:
            module_name = os.path.splitext(os.path.basename(__file__))[0]
            argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(argv, namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        print_step("Checking publish configuration...")
        try:
            maven_config = load_maven_config(context, args)
            publish_config = maven_config.build()

            artifact = publish_config.publication.artifact
            if not artifact.exists():
                raise ArtifactNotFoundError(f"Artifact not found: {artifact.path}")
        except PublishError as e:
            return report_error(e)

        print(maven_config.get_config_summary(publish_config.target.credentials))
        if args.verbose:
            print(f"  Artifact size: {os.path.getsize(artifact.path)} bytes")
        print_success(f"Ready to publish {publish_config.publication.identity.coordinates}")
        return 0
