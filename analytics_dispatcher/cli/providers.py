# ==============================================================================
# Provider Commands
# ==============================================================================
"""
Provider listing command for the analytics dispatcher CLI.
"""

from importlib.metadata import PackageNotFoundError, version

from analytics_dispatcher.cli.shared import C, I
from analytics_dispatcher.utils.config import PROVIDER_NAMES, get_settings

# Third-party package each provider depends on
PROVIDER_PACKAGES = {
    "console": None,
    "google_analytics": "requests",
    "logstash": "requests",
    "kafka": "confluent-kafka",
}


def _installed_version(package_name: str) -> str | None:
    """Installed version of a distribution, or None if it is not installed."""
    try:
        return version(package_name)
    except PackageNotFoundError:
        return None


def _package_status(package_name: str | None) -> str:
    if package_name is None:
        return "built-in"
    installed = _installed_version(package_name)
    if installed is None:
        return f"{package_name} {C.YELLOW}(not installed){C.RESET}"
    return f"{package_name} v{installed}"


def providers_list() -> None:
    """List all available providers, their backing package and whether each is enabled."""
    enabled = get_settings().providers.names
    own_version = _installed_version("analytics-dispatcher")

    print()
    header = f"{C.BOLD}Providers{C.RESET}"
    if own_version:
        header += f" {C.DIM}(analytics-dispatcher v{own_version}){C.RESET}"
    print(header)
    print()
    for name in PROVIDER_NAMES:
        if name in enabled:
            marker = f"{C.GREEN}{I.CHECK}{C.RESET}"
            position = f" (position {enabled.index(name) + 1})"
        else:
            marker = f"{C.DIM}{I.BULLET}{C.RESET}"
            position = ""
        status = _package_status(PROVIDER_PACKAGES[name])
        print(f"  {marker} {name:<18} {C.DIM}{status}{C.RESET}{position}")
    print()
