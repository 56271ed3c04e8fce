import json

import pytest

from chirpmaker import cli
from chirpmaker.drivers import gpio
from chirpmaker.util.exit_codes import ExitCode


def _run(*argv: str) -> int:
    return cli.main(["--driver", "dry-run", *argv])


def test_list_birds_prints_registry(capsys) -> None:
    assert _run("list-birds") == ExitCode.SUCCESS
    payload = json.loads(capsys.readouterr().out)
    assert len(payload["birds"]) == 15
    assert payload["birds"][11]["name"] == "cuckoo"


def test_curve_prints_periods_as_json(capsys) -> None:
    code = _run("curve", "--scale", "chromatic", "--start", "1000", "--stop", "4000", "--steps", "10", "--json")
    assert code == ExitCode.SUCCESS
    steps = json.loads(capsys.readouterr().out)["steps"]
    assert len(steps) == 11
    assert steps[0]["period_us"] == 1000
    assert steps[-1]["period_us"] == 250


def test_curve_text_table(capsys) -> None:
    assert _run("curve", "--scale", "linear", "--start", "1000", "--stop", "2000", "--steps", "2") == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].split() == ["step", "freq_hz", "period_us"]
    assert lines[-1].split() == ["2", "2000.000", "500"]


def test_sinc_curve_without_window_is_invalid() -> None:
    code = _run("curve", "--scale", "sinc_centered", "--start", "1000", "--stop", "2000")
    assert code == ExitCode.INVALID_ARGS


def test_tone_commands_succeed_on_dry_run() -> None:
    assert _run("chirp", "--start", "1000", "--stop", "4000", "--scale", "atan_pi", "--pause", "10ms") == 0
    assert _run("phaser", "--freq", "1500", "--duty-start", "0", "--duty-end", "100") == 0
    assert _run("phone-call", "--times", "2") == 0
    assert _run("signet") == 0


def test_bird_commands_succeed_on_dry_run() -> None:
    assert _run("--seed", "1", "voice", "blackbird") == 0
    assert _run("voice", "4", "--pause", "0") == 0
    assert _run("--seed", "2", "concert", "--pause", "1s", "--count", "3", "--repeat", "2") == 0


def test_unknown_bird_exit_code() -> None:
    assert _run("voice", "nightingale") == ExitCode.UNKNOWN_BIRD
    assert _run("voice", "15") == ExitCode.UNKNOWN_BIRD


def test_rejected_sweep_exit_code() -> None:
    assert _run("chirp", "--start", "1000", "--stop", "2000", "--duty", "0") == ExitCode.INVALID_ARGS
    assert _run("phaser", "--freq", "1000", "--duty-start", "60", "--duty-end", "40") == ExitCode.INVALID_ARGS


def test_missing_gpio_library_exit_code(monkeypatch) -> None:
    monkeypatch.setattr(gpio, "HAVE_GPIO", False)
    assert cli.main(["--driver", "gpio", "signet"]) == ExitCode.DEVICE_UNAVAILABLE


def test_wav_output(tmp_path, capsys) -> None:
    path = tmp_path / "ring.wav"
    code = cli.main(["--driver", "wav", "--wav", str(path), "--sample-rate", "8000", "phone-call", "--times", "1"])
    assert code == ExitCode.SUCCESS
    assert path.stat().st_size > 44
    assert "[wav] wrote" in capsys.readouterr().out


def test_unwritable_wav_exit_code(tmp_path) -> None:
    # The target is an existing directory, so writing the file fails.
    code = cli.main(["--driver", "wav", "--wav", str(tmp_path), "phone-call", "--times", "1"])
    assert code == ExitCode.OUTPUT_ERROR


@pytest.mark.parametrize(
    "argv",
    [
        ["concert", "--repeat", "-1"],
        ["chirp", "--stop", "2000"],
        ["voice", "3", "--pause", "soon"],
        ["voice", "3", "--pause", "infs"],
        ["chirp", "--start", "1000", "--stop", "2000", "--pause", "1e400ms"],
        ["curve", "--scale", "square", "--start", "1", "--stop", "2"],
    ],
)
def test_argument_errors_exit_with_usage(argv) -> None:
    with pytest.raises(SystemExit) as excinfo:
        _run(*argv)
    assert excinfo.value.code == ExitCode.INVALID_ARGS


def test_endless_concert_refuses_wav_driver(tmp_path) -> None:
    path = tmp_path / "forever.wav"
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--driver", "wav", "--wav", str(path), "concert", "--repeat", "0"])
    assert excinfo.value.code == ExitCode.INVALID_ARGS
    assert not path.exists()
