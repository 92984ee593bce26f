"""Tests for environment-driven settings."""

from exprcalc.environment import DEFAULT_MAX_DEPTH, DEFAULT_POW_SNAP_TOLERANCE, Settings, load_settings


def test_defaults_from_empty_env():
    assert load_settings({}) == Settings()


def test_values_read():
    s = load_settings({
        "EXPRCALC_MAX_DEPTH": "25",
        "EXPRCALC_POW_SNAP_TOLERANCE": "0",
        "EXPRCALC_DIGITS": "6",
    })
    assert s.max_depth == 25
    assert s.pow_snap_tolerance == 0.0
    assert s.digits == 6


def test_invalid_values_fall_back():
    s = load_settings({
        "EXPRCALC_MAX_DEPTH": "deep",
        "EXPRCALC_POW_SNAP_TOLERANCE": "-1",
        "EXPRCALC_DIGITS": "0",
    })
    assert s.max_depth == DEFAULT_MAX_DEPTH
    assert s.pow_snap_tolerance == DEFAULT_POW_SNAP_TOLERANCE
    assert s.digits is None


def test_nan_tolerance_falls_back():
    assert load_settings({"EXPRCALC_POW_SNAP_TOLERANCE": "nan"}).pow_snap_tolerance == DEFAULT_POW_SNAP_TOLERANCE


def test_reads_os_environ(monkeypatch):
    monkeypatch.setenv("EXPRCALC_MAX_DEPTH", "7")
    assert load_settings().max_depth == 7
