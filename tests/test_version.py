from ethgo import version
from ethgo.version import get_version


def test_default_version():
    assert get_version() == "0.1.3"


def test_prerelease(monkeypatch):
    monkeypatch.setattr(version, "VERSION_PRERELEASE", "dev")
    assert get_version() == "0.1.3-dev"


def test_prerelease_with_commit(monkeypatch):
    monkeypatch.setattr(version, "VERSION_PRERELEASE", "dev")
    monkeypatch.setattr(version, "GIT_COMMIT", "abc")
    assert get_version() == "0.1.3-dev (abc)"


def test_commit_ignored_without_prerelease(monkeypatch):
    monkeypatch.setattr(version, "GIT_COMMIT", "abc")
    assert get_version() == version.VERSION