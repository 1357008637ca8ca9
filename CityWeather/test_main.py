"""End-to-end tests for the terminal front end with the HTTP layer mocked."""
import pytest
import requests
from unittest.mock import Mock, patch

import main


def _ok_response(data):
    mock_response = Mock()
    mock_response.ok = True
    mock_response.status_code = 200
    mock_response.json.return_value = data
    return mock_response


PARIS_LOCATIONS = [
    {"Key": 623, "LocalizedName": "Paris", "Country": {"LocalizedName": "France"}},
]

PARIS_CONDITIONS = [
    {
        "LocalObservationDateTime": "2024-05-01T14:35:00+02:00",
        "WeatherText": "Sunny",
        "WeatherIcon": 1,
        "Temperature": {"Metric": {"Value": 18.4, "Unit": "C"}},
        "RelativeHumidity": 52,
    }
]


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    """Isolate the CLI from the real environment."""
    monkeypatch.setenv("WEATHER_API_KEY", "test_key")
    monkeypatch.chdir(tmp_path)
    with patch("main.signal.signal"):
        yield tmp_path


def test_run_once_paris(cli_env, capsys):
    """Test a one-shot search prints the Paris card."""
    with patch("accuweather_provider.requests.get") as mock_get:
        mock_get.side_effect = [_ok_response(PARIS_LOCATIONS), _ok_response(PARIS_CONDITIONS)]

        code = main.main(["Paris", "--log-file", str(cli_env / "test.log")])

    out = capsys.readouterr().out
    assert code == 0
    assert "Loading..." in out
    assert "Paris, France" in out
    assert "18°C" in out.splitlines()
    assert "Wind Speed: N/A" in out
    assert mock_get.call_args_list[1][0][0].endswith("/currentconditions/v1/623")


def test_run_once_not_found(cli_env, capsys):
    """Test a one-shot search with no match exits non-zero."""
    with patch("accuweather_provider.requests.get") as mock_get:
        mock_get.return_value = _ok_response([])

        code = main.main(["Atlantis", "--log-file", str(cli_env / "test.log")])

    out = capsys.readouterr().out
    assert code == 1
    assert "City not found. Please check the spelling and try again." in out
    assert mock_get.call_count == 1


def test_run_once_network_error(cli_env, capsys):
    """Test transport failures show the generic message only."""
    with patch("accuweather_provider.requests.get") as mock_get:
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection refused")

        code = main.main(["Paris", "--log-file", str(cli_env / "test.log")])

    out = capsys.readouterr().out
    assert code == 1
    assert "An error occurred while fetching the weather data" in out
    assert "Connection refused" not in out


def test_prompt_loop_skips_blank_lines(cli_env, capsys):
    """Test the interactive loop ignores blank input and stops at EOF."""
    lines = iter(["   ", "Paris"])

    def fake_input(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    with patch("accuweather_provider.requests.get") as mock_get, patch("builtins.input", fake_input):
        mock_get.side_effect = [_ok_response(PARIS_LOCATIONS), _ok_response(PARIS_CONDITIONS)]

        code = main.main(["--log-file", str(cli_env / "test.log")])

    out = capsys.readouterr().out
    assert code == 0
    assert mock_get.call_count == 2
    assert out.count("Loading...") == 1
    assert "Paris, France" in out


def test_load_config_missing_key(monkeypatch, tmp_path):
    """Test a missing key is not fatal."""
    monkeypatch.delenv("WEATHER_API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)

    assert main.load_config() is None
