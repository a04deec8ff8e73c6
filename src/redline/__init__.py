# SPDX-License-Identifier: MIT

from redline.cleanup import register_cleanup
from redline.initialize import initialize
from redline.terminal.app import run


def main() -> None:
    initialize()
    register_cleanup()
    run()


if __name__ == "__main__":
    main()
