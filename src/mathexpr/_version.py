"""Installed version of mathexpr."""

from importlib.metadata import PackageNotFoundError, version


def get_version() -> str:
    try:
        return version("mathexpr")
    except PackageNotFoundError:
        # Running from a source checkout without an install
        return "0.0.0+unknown"
