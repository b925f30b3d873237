import pytest

from slstatus.components import battery


@pytest.fixture
def supply(tmp_path, monkeypatch):
    monkeypatch.setattr(battery, "POWER_SUPPLY_DIR", str(tmp_path))
    monkeypatch.setattr(battery, "_LINUX", True)
    bat = tmp_path / "BAT0"
    bat.mkdir()

    def write(**files):
        for name, content in files.items():
            (bat / name).write_text(content)

    return write


def test_battery_perc(supply):
    supply(capacity="87\n")
    assert battery.battery_perc("BAT0") == "87"


def test_battery_perc_missing(supply, capsys):
    assert battery.battery_perc("BAT0") is None
    assert "fopen" in capsys.readouterr().err


def test_battery_perc_garbage(supply):
    supply(capacity="none\n")
    assert battery.battery_perc("BAT0") is None


@pytest.mark.parametrize(
    "status, symbol",
    [("Charging", "+"), ("Discharging", "-"), ("Full", "o"), ("Unknown", "?")],
)
def test_battery_state(supply, status, symbol):
    supply(status=status + "\n")
    assert battery.battery_state("BAT0") == symbol


def test_battery_state_missing(supply):
    assert battery.battery_state("BAT0") is None


def test_remaining_while_charging_is_empty(supply):
    supply(status="Charging\n", charge_now="3000000\n")
    assert battery.battery_remaining("BAT0") == ""


def test_remaining_while_discharging(supply):
    supply(
        status="Discharging\n",
        charge_now="3000000\n",
        current_now="2000000\n",
    )
    assert battery.battery_remaining("BAT0") == "1h 30m"


def test_remaining_uses_energy_and_power(supply):
    supply(status="Discharging\n", energy_now="1000\n", power_now="4000\n")
    assert battery.battery_remaining("BAT0") == "0h 15m"


def test_remaining_zero_rate(supply):
    supply(status="Discharging\n", charge_now="1000\n", current_now="0\n")
    assert battery.battery_remaining("BAT0") is None


def test_remaining_without_charge_file(supply):
    supply(status="Discharging\n", current_now="1000\n")
    assert battery.battery_remaining("BAT0") is None


def test_remaining_without_rate_file(supply):
    supply(status="Discharging\n", charge_now="1000\n")
    assert battery.battery_remaining("BAT0") is None


def test_remaining_without_status(supply):
    supply(charge_now="1000\n", current_now="1000\n")
    assert battery.battery_remaining("BAT0") is None


def test_remaining_format_shape(supply):
    supply(status="Discharging\n", charge_now="7\n", current_now="3\n")
    result = battery.battery_remaining("BAT0")
    hours, minutes = result.split()
    assert hours.endswith("h") and minutes.endswith("m")
    assert 0 <= int(minutes[:-1]) < 60