"""
Tests for the alicloud-admission command line.
"""

import copy

import pytest
import yaml

from alicloud_admission.cli.validate import main



def _write(tmp_path, name, manifest):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(manifest), encoding="utf-8")
    return str(path)


class TestMain:
    def test_valid_shoot(self, tmp_path, capsys, shoot):
        path = _write(tmp_path, "shoot.yaml", shoot)
        with pytest.raises(SystemExit) as exc_info:
            main(["shoot", "--new", path])
        assert exc_info.value.code == 0
        assert f"shoot {path} is valid" in capsys.readouterr().out

    def test_rejected_update(self, tmp_path, capsys, backup_bucket):
        new = copy.deepcopy(backup_bucket)
        new["spec"]["providerConfig"]["immutability"]["locked"] = False
        old_path = _write(tmp_path, "old.yaml", backup_bucket)
        new_path = _write(tmp_path, "new.yaml", new)
        with pytest.raises(SystemExit) as exc_info:
            main(["backupbucket", "--new", new_path, "--old", old_path])
        assert exc_info.value.code == 1
        assert "ERROR: spec.providerConfig.immutability.locked: Forbidden" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["seed", "--new", str(tmp_path / "absent.yaml")])
        assert exc_info.value.code == 1
        assert "manifest not found" in capsys.readouterr().err

    def test_empty_file(self, tmp_path, capsys):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            main(["secret", "--new", str(path)])
        assert exc_info.value.code == 1
        assert "manifest is empty" in capsys.readouterr().err

    def test_unknown_kind(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["worker", "--new", "x.yaml"])
        assert exc_info.value.code == 2

    def test_settings_from_environment(self, tmp_path, monkeypatch, shoot):
        shoot["spec"]["provider"]["infrastructureConfig"]["dualStack"] = {"enabled": True}
        path = _write(tmp_path, "shoot.yaml", shoot)

        with pytest.raises(SystemExit) as exc_info:
            main(["shoot", "--new", path])
        assert exc_info.value.code == 1

        monkeypatch.setenv("ALICLOUD_ADMISSION_DUAL_STACK_REGIONS", '["cn-beijing"]')
        with pytest.raises(SystemExit) as exc_info:
            main(["shoot", "--new", path])
        assert exc_info.value.code == 0
