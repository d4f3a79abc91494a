from importlib import metadata as importlib_metadata

DISTRIBUTION_NAME = "messaging-read-layer"


def get_project_name(default: str = "messaging") -> str:
    """
    Service name used in structured logs: the installed distribution name, or
    `default` when running from a source checkout.
    """
    try:
        return importlib_metadata.metadata(DISTRIBUTION_NAME)["Name"]
    except importlib_metadata.PackageNotFoundError:
        return default


def get_project_version(default: str = "unknown") -> str:
    try:
        return importlib_metadata.version(DISTRIBUTION_NAME)
    except importlib_metadata.PackageNotFoundError:
        return default


__all__ = [
    "DISTRIBUTION_NAME",
    "get_project_name",
    "get_project_version",
]
