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

from gprpublish.utils.context.context import CliContext
from gprpublish.utils.context.namespace import CliNameSpace


# Base class of the root command and every subcommand
class CliCommand:
    def description(self) -> str:
        return ""

    def cli(self, argv=None) -> CliNameSpace:
        raise NotImplementedError

    def exec(self, context: CliContext, args: CliNameSpace) -> int:
        raise NotImplementedError
