import json

import pytest
import yaml

from arch_installer.config import DEFAULT_BASE_PACKAGES, InstallerConfig, load_config
from arch_installer.state_store import append_intent, mark_step_completed, new_state, record_decision, save_state


def test_defaults_without_file():
    cfg = load_config(None)
    assert cfg.mount_point == "/mnt"
    assert cfg.zoneinfo_dir == "/usr/share/zoneinfo"
    assert cfg.base_packages == DEFAULT_BASE_PACKAGES
    assert cfg.default_locale == "en_US.UTF-8 UTF-8"
    assert cfg.locale_page_size == 30
    assert cfg.grub_target == "i386-pc"
    assert cfg.user_groups == ["wheel", "users"]
    assert cfg.reboot is True
    assert cfg.dry_run is False


def test_yaml_values_and_cli_overrides(tmp_path):
    path = tmp_path / "installer.yaml"
    path.write_text(
        yaml.safe_dump({"mount_point": "/target", "locale_page_size": 12, "reboot": False}),
        encoding="utf-8",
    )

    cfg = load_config(str(path)).with_overrides(dry_run=True, reboot=None, state_path=str(tmp_path / "s.json"))

    assert cfg.mount_point == "/target"
    assert cfg.locale_page_size == 12
    assert cfg.reboot is False
    assert cfg.dry_run is True
    assert cfg.state_path == str(tmp_path / "s.json")


def test_config_rejects_non_mapping_and_non_yaml(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(bad))

    json_file = tmp_path / "cfg.json"
    json_file.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(json_file))

    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))


def test_broken_yaml_is_a_value_error(tmp_path):
    path = tmp_path / "installer.yaml"
    path.write_text("mount_point: [unclosed\n", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid YAML"):
        load_config(str(path))


@pytest.mark.parametrize(
    "raw",
    [
        {"base_packages": "base"},
        {"base_packages": []},
        {"base_packages": ["base", 3]},
        {"user_groups": "wheel"},
        {"user_groups": []},
        {"reboot": "no"},
        {"dry_run": 1},
        {"locale_page_size": 0},
        {"timezone_page_size": -5},
        {"timezone_page_size": "10"},
        {"locale_page_size": 2.5},
        {"locale_page_size": True},
        {"mount_point": ["/mnt"]},
    ],
)
def test_config_rejects_wrongly_typed_values(tmp_path, raw):
    path = tmp_path / "installer.yaml"
    path.write_text(yaml.safe_dump(raw), encoding="utf-8")

    with pytest.raises(ValueError):
        load_config(str(path))


def test_overrides_are_validated():
    with pytest.raises(ValueError):
        InstallerConfig().with_overrides(timezone_page_size=0)


def test_valid_lists_and_flags_are_kept_as_given(tmp_path):
    path = tmp_path / "installer.yaml"
    path.write_text(
        "base_packages: [base, linux]\nuser_groups: [wheel]\nreboot: false\ntimezone_page_size: 1\n",
        encoding="utf-8",
    )

    cfg = load_config(str(path))

    assert cfg.base_packages == ["base", "linux"]
    assert cfg.user_groups == ["wheel"]
    assert cfg.reboot is False
    assert cfg.timezone_page_size == 1


@pytest.mark.parametrize("name", ["state.json", "state.yaml"])
def test_state_round_trip(tmp_path, name):
    state = new_state(InstallerConfig().summary())
    mark_step_completed(state, "10_disk_prep")
    mark_step_completed(state, "10_disk_prep")
    record_decision(state, "hostname", "archbox")

    path = tmp_path / name
    save_state(str(path), state)
    text = path.read_text(encoding="utf-8")
    loaded = yaml.safe_load(text) if name.endswith(".yaml") else json.loads(text)

    assert loaded == state
    assert loaded["execution"]["completed_steps"] == ["10_disk_prep"]


def test_save_state_creates_parent_directories(tmp_path):
    path = tmp_path / "var/lib/arch-autoinstall/state.json"
    save_state(str(path), new_state({}))
    assert json.loads(path.read_text())["execution"]["status"] == "running"


def test_append_intent_writes_json_lines(tmp_path):
    path = tmp_path / "sub" / "intents.jsonl"
    append_intent(str(path), stage="10_disk_prep", action="partition", device="/dev/sdb")
    append_intent(str(path), stage="10_disk_prep", action="format", partition="/dev/sdb1")

    lines = [json.loads(l) for l in path.read_text().splitlines()]
    assert [l["action"] for l in lines] == ["partition", "format"]
    assert lines[0]["device"] == "/dev/sdb"
