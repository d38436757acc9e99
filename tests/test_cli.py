import pytest

from ksense_assessment.cli import main, run
from ksense_assessment.config import DEFAULT_BASE_URL, Settings
from ksense_assessment.errors import ConfigError, FatalHTTPError
from ksense_assessment.transport import FETCH_POLICY, SUBMIT_POLICY

from fakes import FakeResponse, FakeSession, page

PAGE_1 = [
    {"patient_id": "DEMO001", "blood_pressure": "145/92", "temperature": 99.9, "age": 70},
    {"patient_id": "DEMO002", "blood_pressure": None, "temperature": 98.0, "age": 40},
]
PAGE_2 = [
    {"patient_id": "DEMO003", "blood_pressure": "110/70", "temperature": "101.2", "age": "unknown"},
    {"patient_id": "DEMO001", "blood_pressure": "145/92", "temperature": 99.9, "age": 70},
]


def test_settings_from_env():
    settings = Settings.from_env({"YOUR_API_KEY": " abc "})
    assert settings.api_key == "abc"
    assert settings.base_url == DEFAULT_BASE_URL

    settings = Settings.from_env({"KSENSE_API_KEY": "k2", "KSENSE_BASE_URL": "http://local/api"})
    assert (settings.api_key, settings.base_url) == ("k2", "http://local/api")

    settings = Settings.from_env({"YOUR_API_KEY": "env"}, api_key="flag", base_url="http://x")
    assert (settings.api_key, settings.base_url) == ("flag", "http://x")


def test_settings_missing_key():
    with pytest.raises(ConfigError):
        Settings.from_env({"YOUR_API_KEY": ""})


@pytest.mark.parametrize("environ, flag", [
    ({"YOUR_API_KEY": "   "}, None),
    ({"KSENSE_API_KEY": "\t\n"}, None),
    ({}, "  "),
])
def test_settings_blank_key_is_missing(environ, flag):
    with pytest.raises(ConfigError):
        Settings.from_env(environ, api_key=flag)


def test_blank_key_falls_through_to_alias():
    settings = Settings.from_env({"YOUR_API_KEY": "  ", "KSENSE_API_KEY": "k2"})
    assert settings.api_key == "k2"


def test_run_end_to_end(sleeps, capsys):
    session = FakeSession([
        page(PAGE_1, hasNext=True),
        page(PAGE_2, hasNext=True),
        page([], hasNext=True),
        FakeResponse(200, {"success": True}),
    ])

    resp = run(Settings(api_key="k", base_url="https://api.test/api"), session=session, sleep=sleeps)

    assert resp == {"success": True}
    method, url, kwargs = session.calls[-1]
    assert method == "POST"
    assert kwargs["json"] == {
        "high_risk_patients": ["DEMO001"],
        "fever_patients": ["DEMO001", "DEMO003"],
        "data_quality_issues": ["DEMO002", "DEMO003"],
    }
    assert "Got 4 patients" in capsys.readouterr().out


def test_main_missing_key_makes_no_requests(sleeps):
    session = FakeSession([])
    assert main([], session=session, sleep=sleeps, environ={}) == 1
    assert session.calls == []


def test_main_dry_run_skips_submission(sleeps, capsys):
    session = FakeSession([page(PAGE_1), page([])])
    assert main(["--dry-run", "--api-key", "k"], session=session, sleep=sleeps, environ={}) == 0
    assert [c[0] for c in session.calls] == ["GET", "GET"]
    assert '"high_risk_patients"' in capsys.readouterr().out


def test_main_fatal_fetch_aborts_without_submit(sleeps):
    session = FakeSession([page(PAGE_1), FakeResponse(401, text="bad key")])
    assert main([], session=session, sleep=sleeps, environ={"YOUR_API_KEY": "k"}) == 1
    assert [c[0] for c in session.calls] == ["GET", "GET"]


def test_run_tags_failing_stage(sleeps):
    session = FakeSession([page([]), FakeResponse(404, text="missing")])

    with pytest.raises(FatalHTTPError) as info:
        run(Settings(api_key="k"), session=session, sleep=sleeps)

    assert info.value.stage == "submit"


def test_main_blank_key_makes_no_requests(sleeps):
    session = FakeSession([])
    assert main(["--api-key", " "], session=session, sleep=sleeps, environ={}) == 1
    assert session.calls == []


def test_main_exhausted_fetch_aborts_without_submit(sleeps, caplog):
    session = FakeSession([page(PAGE_1)] + [FakeResponse(503, text="down")] * FETCH_POLICY.attempts)

    assert main([], session=session, sleep=sleeps, environ={"YOUR_API_KEY": "k"}) == 1

    assert [c[0] for c in session.calls] == ["GET"] * (1 + FETCH_POLICY.attempts)
    assert "fetch failed" in caplog.text
    assert "HTTP 503" in caplog.text


def test_main_reports_network_cause(sleeps, caplog, connection_error):
    session = FakeSession([connection_error] * FETCH_POLICY.attempts)

    assert main([], session=session, sleep=sleeps, environ={"YOUR_API_KEY": "k"}) == 1

    assert "fetch failed" in caplog.text
    assert "ConnectionError: connection reset" in caplog.text


def test_main_exhausted_submit_returns_error(sleeps, caplog):
    session = FakeSession([page(PAGE_1), page([])] + [FakeResponse(500, text="boom")] * SUBMIT_POLICY.attempts)

    assert main([], session=session, sleep=sleeps, environ={"YOUR_API_KEY": "k"}) == 1

    assert [c[0] for c in session.calls] == ["GET", "GET"] + ["POST"] * SUBMIT_POLICY.attempts
    assert "submit failed" in caplog.text
