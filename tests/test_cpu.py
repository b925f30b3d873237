import pytest

from slstatus.components import cpu
from slstatus.util import fmt_human


def stat_line(user, nice, system, idle, iowait, irq, softirq):
    return (
        f"cpu  {user} {nice} {system} {idle} {iowait} {irq} {softirq} 0 0 0\n"
        "cpu0 1 1 1 1 1 1 1 0 0 0\n"
    )


@pytest.fixture
def stat(tmp_path):
    return tmp_path / "stat"


def test_first_reading_is_none(stat):
    stat.write_text(stat_line(100, 100, 100, 100, 100, 100, 100))
    meter = cpu.CpuMeter(str(stat))
    assert meter.perc() is None


def test_half_busy(stat):
    stat.write_text(stat_line(100, 100, 100, 100, 100, 100, 100))
    meter = cpu.CpuMeter(str(stat))
    meter.perc()
    stat.write_text(stat_line(200, 100, 100, 200, 100, 100, 100))
    assert meter.perc() == "50"


def test_all_idle(stat):
    stat.write_text(stat_line(100, 0, 0, 100, 0, 0, 0))
    meter = cpu.CpuMeter(str(stat))
    meter.perc()
    stat.write_text(stat_line(100, 0, 0, 300, 0, 0, 0))
    assert meter.perc() == "0"


def test_all_busy(stat):
    stat.write_text(stat_line(100, 0, 0, 100, 0, 0, 0))
    meter = cpu.CpuMeter(str(stat))
    meter.perc()
    stat.write_text(stat_line(150, 10, 20, 100, 0, 10, 10))
    assert meter.perc() == "100"


def test_iowait_counts_as_not_busy(stat):
    stat.write_text(stat_line(100, 0, 0, 100, 0, 0, 0))
    meter = cpu.CpuMeter(str(stat))
    meter.perc()
    stat.write_text(stat_line(100, 0, 0, 100, 50, 0, 0))
    assert meter.perc() == "0"


def test_no_change_is_none(stat):
    stat.write_text(stat_line(100, 100, 100, 100, 100, 100, 100))
    meter = cpu.CpuMeter(str(stat))
    meter.perc()
    assert meter.perc() is None


def test_zero_user_first_reading_stays_none(stat):
    stat.write_text(stat_line(0, 0, 0, 100, 0, 0, 0))
    meter = cpu.CpuMeter(str(stat))
    meter.perc()
    stat.write_text(stat_line(0, 0, 0, 200, 0, 0, 0))
    assert meter.perc() is None


def test_malformed_stat(stat):
    stat.write_text("cpu 1 2 3\n")
    meter = cpu.CpuMeter(str(stat))
    assert meter.perc() is None
    assert meter.perc() is None


def test_missing_stat(tmp_path, capsys):
    meter = cpu.CpuMeter(str(tmp_path / "absent"))
    assert meter.perc() is None
    assert "fopen" in capsys.readouterr().err


def test_cpu_perc_is_percentage_or_none():
    cpu.cpu_perc()
    result = cpu.cpu_perc()
    assert result is None or 0 <= int(result) <= 100


def test_cpu_freq(tmp_path, monkeypatch):
    path = tmp_path / "scaling_cur_freq"
    path.write_text("2400000\n")
    monkeypatch.setattr(cpu, "_LINUX", True)
    monkeypatch.setattr(cpu, "FREQ_PATH", str(path))
    assert cpu.cpu_freq() == fmt_human(2400000 * 1000, 1000)


def test_cpu_freq_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(cpu, "_LINUX", True)
    monkeypatch.setattr(cpu, "FREQ_PATH", str(tmp_path / "absent"))
    assert cpu.cpu_freq() is None


def test_cpu_freq_garbage(tmp_path, monkeypatch):
    path = tmp_path / "scaling_cur_freq"
    path.write_text("unknown\n")
    monkeypatch.setattr(cpu, "_LINUX", True)
    monkeypatch.setattr(cpu, "FREQ_PATH", str(path))
    assert cpu.cpu_freq() is None