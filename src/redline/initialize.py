# SPDX-License-Identifier: MIT

from yaml import dump

try:
    from yaml import CDumper as Dumper
except ImportError:
    from yaml import Dumper  # type: ignore[assignment]

from redline import configuration
from redline.template.configuration import get_configuration_template


def initialize() -> None:
    configuration.load_path_configuration()
    configuration.CONFIG_PATH.mkdir(parents=True, exist_ok=True)
    configuration.CACHE_PATH.mkdir(parents=True, exist_ok=True)

    __ensure_config_files()


def __ensure_config_files() -> None:
    if not configuration.APP_CONFIG_PATH.is_file():
        configuration.APP_CONFIG_PATH.write_text(
            dump(dict(get_configuration_template()), Dumper=Dumper)
        )
