"""Version information of the command line tool."""

GIT_COMMIT = ""
VERSION = "0.1.3"
VERSION_PRERELEASE = ""


def get_version() -> str:
    """Return the version, with the prerelease marker and commit when set."""
    version = VERSION
    if VERSION_PRERELEASE:
        version += f"-{VERSION_PRERELEASE}"
        if GIT_COMMIT:
            version += f" ({GIT_COMMIT})"
    return version