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

"""
Terminal output helpers.
"""

import sys


class Colors:
    """ANSI color codes for terminal output."""
    OKBLUE = '\033[94m'
    OKCYAN = '\033[96m'
    OKGREEN = '\033[92m'
    WARNING = '\033[93m'
    FAIL = '\033[91m'
    ENDC = '\033[0m'
    BOLD = '\033[1m'


def _colored(stream) -> bool:
    return hasattr(stream, 'isatty') and stream.isatty()


def _paint(text, color, stream):
    if not _colored(stream):
        return text
    return f"{color}{text}{Colors.ENDC}"


def print_step(message):
    """Print a step message."""
    print(_paint(f">>> {message}", Colors.OKBLUE + Colors.BOLD, sys.stdout))


def print_info(message):
    """Print a detail line."""
    print(_paint(message, Colors.OKCYAN, sys.stdout))


def print_success(message):
    """Print a success message."""
    print(_paint(f"✓ {message}", Colors.OKGREEN, sys.stdout))


def print_warning(message):
    """Print a warning message."""
    print(_paint(f"⚠ {message}", Colors.WARNING, sys.stderr), file=sys.stderr)


def print_error(message):
    """Print an error message."""
    print(_paint(f"✗ {message}", Colors.FAIL, sys.stderr), file=sys.stderr)
