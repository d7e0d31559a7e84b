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

import os
import sys
import importlib
import argparse

from gprpublish.utils.console import print_error
from gprpublish.utils.context.namespace import CliNameSpace
from gprpublish.utils.context.context import CliContext
from gprpublish.utils.context.command import CliCommand

SCRIPT_PATH = os.path.split(os.path.realpath(__file__))[0]
PACKAGE_NAME = os.path.basename(SCRIPT_PATH)


# Root Class for Command Line Interface
class Cli(CliCommand):
    def description(self) -> str:
        return """gprpublish - Publish a prebuilt Android library to a Maven repository

USAGE:
    gprpublish <command> [options]

COMMANDS:
    publish     Upload the AAR, its POM and checksums to the repository
    check       Validate configuration, credentials and artifact offline
    pom         Print the POM that would be uploaded

EXAMPLES:
    gprpublish check                          # Verify everything is in place
    gprpublish publish                        # Publish com.paymenttools:paymenttoolssdk
    gprpublish publish --dry-run              # List uploads without sending
    gprpublish publish --publish-version 1.0.14

For more information on a specific command:
    gprpublish <command> --help
        """

    def get_command_list(self) -> list:
        arr = []
        for command in os.listdir(os.path.join(SCRIPT_PATH, "commands")):
            if (not command.startswith(("_", "test_"))
                    and command.endswith(".py")):
                arr.append(os.path.splitext(os.path.basename(command))[0])
        return sorted(arr)

    def _parser(self, add_help: bool) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="gprpublish",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            description=self.description(),
            add_help=add_help,
        )
        parser.add_argument(
            "subcommand",
            metavar=f"{self.get_command_list()}",
            type=str,
            nargs=None if add_help else '?',
            choices=self.get_command_list(),
        )
        return parser

    def cli(self, argv=None) -> CliNameSpace:
        if argv is None:
            argv = sys.argv[1:]

        # Help for the main command only, not for subcommands
        if len(argv) == 1 and argv[0] in ['--help', '-h']:
            self._parser(add_help=True).print_help()
            sys.exit(0)

        # parse only known args - this will NOT consume subcommand options
        args, unknown = self._parser(add_help=False).parse_known_args(
            argv, namespace=CliNameSpace())
        args.remaining = list(argv)
        if args.subcommand in args.remaining:
            args.remaining.remove(args.subcommand)
        return args

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        if not args.subcommand:
            print_error("No command specified\n")
            self._parser(add_help=True).print_help()
            return 1

        # get module name
        module_name = f"{PACKAGE_NAME}.commands.{args.subcommand}"
        # get class name
        class_name = args.subcommand.capitalize()
        # import module
        module = importlib.import_module(module_name)
        # get class of module
        klass = getattr(module, class_name)
        # instance class
        sub_cmd = klass()
        # now execute the subcommand
        return sub_cmd.exec(context, sub_cmd.cli(args.remaining))
