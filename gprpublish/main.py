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

import sys

from gprpublish.cli import Cli
from gprpublish.utils.context.context import CliContext


def main(argv=None) -> int:
    cmd = Cli()
    return cmd.exec(CliContext(), cmd.cli(argv))


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
