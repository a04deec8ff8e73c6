from redline.repository.configuration import ConfigurationRepository


def test_missing_file_gives_defaults(config_repo):
    config = config_repo.get_config()
    assert config["redmine_url"] is None
    assert config["cache_ttl_minutes"] == 10
    assert config["time_entry_days"] == 7
    assert config["issue_match_fields"] == "subject,id"


def test_old_file_keeps_defaults_for_new_keys(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("redmine_url: https://redmine.test\napi_key: abc\nobsolete: 1\n")

    config = ConfigurationRepository(path).get_config()

    assert config["redmine_url"] == "https://redmine.test"
    assert config["api_key"] == "abc"
    assert config["open_command"] is None
    assert "obsolete" not in config


def test_malformed_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n")

    assert ConfigurationRepository(path).get_config()["api_key"] is None


def test_flush_only_writes_changes(config_repo):
    assert config_repo.flush() is False

    config_repo.update_config(redmine_url="https://redmine.test", api_key="abc")
    assert config_repo.flush() is True

    config_repo.update_config(remove_api_key=True)
    config_repo.flush()
    reloaded = ConfigurationRepository(config_repo.path).get_config()
    assert reloaded["redmine_url"] == "https://redmine.test"
    assert reloaded["api_key"] is None


def test_failed_save_keeps_memory_and_stays_dirty(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    config_repo = ConfigurationRepository(blocker / "config.yaml")

    config_repo.update_config(redmine_url="https://redmine.test")

    assert config_repo.flush() is False
    assert config_repo.is_dirty
    assert config_repo.get_config()["redmine_url"] == "https://redmine.test"
