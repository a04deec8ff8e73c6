# SPDX-License-Identifier: MIT

import atexit

from redline import state


def flush_and_sync() -> None:
    state.get_config_repo().flush()

    # Only a cache that was used this run can have an unsaved change
    cache_repo = state.peek_cache_repo()
    if cache_repo is not None:
        cache_repo.flush()


def register_cleanup() -> None:
    atexit.register(flush_and_sync)
