import os
from types import SimpleNamespace

import pytest

from slstatus.components import disk
from slstatus.util import fmt_human


@pytest.fixture
def fake_fs(monkeypatch):
    stats = SimpleNamespace(f_frsize=1024, f_blocks=100, f_bavail=25, f_bfree=50)
    monkeypatch.setattr(os, "statvfs", lambda _path: stats)
    return stats


def test_disk_perc_from_stats(fake_fs):
    assert disk.disk_perc("/") == "75"


def test_disk_total_from_stats(fake_fs):
    assert disk.disk_total("/") == "100.0 Ki"


def test_disk_used_from_stats(fake_fs):
    assert disk.disk_used("/") == fmt_human(50 * 1024, 1024)


def test_disk_free_from_stats(fake_fs):
    assert disk.disk_free("/") == fmt_human(25 * 1024, 1024)


def test_disk_perc_zero_blocks(monkeypatch):
    stats = SimpleNamespace(f_frsize=1024, f_blocks=0, f_bavail=0, f_bfree=0)
    monkeypatch.setattr(os, "statvfs", lambda _path: stats)
    assert disk.disk_perc("/") is None


def test_disk_perc_real_filesystem_in_range(tmp_path):
    value = int(disk.disk_perc(str(tmp_path)))
    assert 0 <= value <= 100


def test_disk_total_real_filesystem_has_unit(tmp_path):
    number, unit = disk.disk_total(str(tmp_path)).split(" ")
    assert float(number) >= 0
    assert unit in {"", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei", "Zi", "Yi"}


@pytest.mark.parametrize(
    "func", [disk.disk_free, disk.disk_perc, disk.disk_total, disk.disk_used]
)
def test_missing_path_is_unknown(func, tmp_path, capsys):
    assert func(str(tmp_path / "absent")) is None
    assert "statvfs" in capsys.readouterr().err