# SPDX-License-Identifier: MIT

from taskforce.initialize import initialize
from taskforce.terminal.app import run


def main() -> None:
    initialize()
    run()


if __name__ == "__main__":
    main()
