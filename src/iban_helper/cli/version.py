from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "iban-helper"


def get_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return "0.0.0-dev"
