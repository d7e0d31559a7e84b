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
from gprpublish.utils.console import print_success
from gprpublish.utils.context.command import CliCommand
from gprpublish.utils.context.context import CliContext
from gprpublish.utils.context.namespace import CliNameSpace
from gprpublish.utils.maven import ConfigurationError, PublishError, declare_publication
from gprpublish.utils.maven.pom import generate_pom


class Pom(CliCommand):
    def description(self) -> str:
        return """
        This is a subcommand to print the POM that publishing would upload.

        Credentials are not needed.

        Examples:
            gprpublish pom
            gprpublish pom --output paymenttoolssdk-1.0.13.pom
        """

    def cli(self, argv=None) -> CliNameSpace:
        parser = argparse.ArgumentParser(
            prog="gprpublish pom",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
        )
        add_project_arguments(parser)
        parser.add_argument(
            "-o", "--output",
            type=str,
            default=None,
            help="Write the POM to this file instead of stdout",
        )
        if argv is None:
            module_name = os.path.splitext(os.path.basename(__file__))[0]
            argv = [x for x in sys.argv[1:] if x != module_name]
        args, unknown = parser.parse_known_args(argv, namespace=CliNameSpace())
        return args

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        try:
            maven_config = load_maven_config(context, args)
            is_valid, error_msg = maven_config.validate()
            if not is_valid:
                raise ConfigurationError(error_msg)

            publication = declare_publication(
                maven_config.group_id,
                maven_config.artifact_id,
                maven_config.version,
                maven_config.artifact_path,
                maven_config.publication_name,
            )
            pom = generate_pom(publication.identity, publication.artifact.extension,
                               maven_config.pom_name, maven_config.pom_description)

            if args.output:
                try:
                    with open(args.output, 'w', encoding='utf-8') as f:
                        f.write(pom)
                except OSError as e:
                    raise PublishError(f"Cannot write {args.output}: {e}")
                print_success(f"POM written to {args.output}")
            else:
                sys.stdout.write(pom)
        except PublishError as e:
            return report_error(e)

        return 0
