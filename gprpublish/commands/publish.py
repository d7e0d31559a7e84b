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
from gprpublish.utils.maven import DryRunPublisher, PublishError, publish_android


class Publish(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to publish the prebuilt AAR to the Maven repository.

        Credentials are read from gpr.usr and gpr.key in github.properties.

        Examples:
            gprpublish publish                          # Publish with the default configuration
            gprpublish publish --dry-run                # Show the uploads, send nothing
            gprpublish publish --publish-version 1.0.14 # Publish another version
            gprpublish publish --project-dir ../sdk -v  # Publish from another directory
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="gprpublish publish",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_project_arguments(parser)
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Resolve everything and list the uploads without sending them",
        )
        if argv is None:
            module_name = os.path.splitext(os.path.basename(__file__))[0]
            argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(argv, namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        try:
            maven_config = load_maven_config(context, args)
            publish_config = maven_config.build()

            if args.verbose:
                print(maven_config.get_config_summary(publish_config.target.credentials))

            if args.dry_run:
                print_step(f"Dry run for {publish_config.publication.identity.coordinates}")
                DryRunPublisher().publish(publish_config.publication, publish_config.target)
                print_success("Dry run complete, nothing was uploaded")
            else:
                publish_android(publish_config, verbose=args.verbose)
        except PublishError as e:
            return report_error(e)

        return 0
