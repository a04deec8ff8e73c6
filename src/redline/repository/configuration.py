# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from pathlib import Path
from typing import Optional

from yaml import YAMLError, dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from redline import configuration
from redline.template.configuration import get_configuration_template

logger = logging.getLogger(__name__)


class ConfigurationRepository:
    def __init__(self, path: Path) -> None:
        self.path = path
        self._config: Optional[configuration.Configuration] = None
        self.is_dirty = False

    @property
    def config(self) -> configuration.Configuration:
        if self._config is None:
            self.__load_data()
        if self._config is None:
            raise ValueError()
        return self._config

    def __load_data(self) -> None:
        self._config = get_configuration_template()
        if not self.path.is_file():
            return

        try:
            raw_config = load(self.path.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            logger.warning("Error loading config %s: %s", self.path, e)
            return

        if not isinstance(raw_config, dict):
            logger.warning("Ignoring malformed config %s", self.path)
            return

        # Keys missing from older config files keep their template defaults
        for key, value in raw_config.items():
            if key in self._config:
                self._config[key] = value  # type: ignore[literal-required]

    def __save_data(self, config: configuration.Configuration) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(dump(dict(config), Dumper=Dumper))
        except (OSError, YAMLError) as e:
            logger.error("Error saving config %s: %s", self.path, e)
            return
        self.is_dirty = False

    def flush(self) -> bool:
        if self._config is not None and self.is_dirty:
            self.__save_data(self._config)
            return not self.is_dirty
        return False

    def get_config(self) -> configuration.Configuration:
        return deepcopy(self.config)

    def set_config(self, config: configuration.Configuration) -> None:
        self.is_dirty = True
        self._config = deepcopy(config)

    def update_config(
        self,
        redmine_url: Optional[str] = None,
        api_key: Optional[str] = None,
        remove_api_key: bool = False,
        allow_self_signed_cert: Optional[bool] = None,
        cache_ttl_minutes: Optional[int] = None,
        time_entry_days: Optional[int] = None,
        issue_match_fields: Optional[str] = None,
        open_command: Optional[str] = None,
    ) -> None:
        self.is_dirty = True

        if redmine_url is not None:
            self.config["redmine_url"] = redmine_url
        if api_key is not None:
            self.config["api_key"] = api_key
        if remove_api_key:
            self.config["api_key"] = None
        if allow_self_signed_cert is not None:
            self.config["allow_self_signed_cert"] = allow_self_signed_cert
        if cache_ttl_minutes is not None:
            self.config["cache_ttl_minutes"] = cache_ttl_minutes
        if time_entry_days is not None:
            self.config["time_entry_days"] = time_entry_days
        if issue_match_fields is not None:
            self.config["issue_match_fields"] = issue_match_fields
        if open_command is not None:
            self.config["open_command"] = open_command
