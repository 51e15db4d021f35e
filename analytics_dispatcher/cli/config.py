# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the analytics dispatcher CLI.
"""

import json
from typing import Annotated

import typer

from analytics_dispatcher.cli.shared import C
from analytics_dispatcher.utils.config import get_settings


# ==============================================================================
# Commands
# ==============================================================================


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration (includes secrets in JSON mode)."""
    settings = get_settings()
    dispatcher = settings.dispatcher

    if json_output:
        config = {
            "dispatcher": dispatcher.model_dump(),
            "providers": {
                "enabled": settings.providers.names,
            },
            "google_analytics": settings.google_analytics.model_dump(),
            "logstash": settings.logstash.model_dump(),
            "kafka": settings.kafka.model_dump(),
            "log_level": settings.log_level,
        }
        print(json.dumps(config, indent=2))
        return

    # Human-readable output
    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    print()

    print(f"{C.CYAN}Dispatcher{C.RESET}")
    print(f"  Logging level:    {C.WHITE}{dispatcher.logging_level}{C.RESET}")
    print(f"  Page time:        {C.WHITE}{_on_off(dispatcher.track_page_time)}{C.RESET}")
    print(f"  Session time:     {C.WHITE}{_on_off(dispatcher.track_session_time)}{C.RESET}")
    print(
        f"  Timeout estimate: "
        f"{C.WHITE}{_on_off(dispatcher.adjust_session_timing_for_timeout)}{C.RESET}"
    )
    print(f"  Idle timeout:     {C.WHITE}{dispatcher.idle_timeout_ms} ms{C.RESET}")
    print(f"  Kiosk home page:  {C.WHITE}{dispatcher.kiosk_home_page or '-'}{C.RESET}")
    print()

    print(f"{C.CYAN}Providers{C.RESET}")
    print(f"  Enabled:          {C.WHITE}{', '.join(settings.providers.names) or '-'}{C.RESET}")
    print(
        f"  Google Analytics: "
        f"{C.WHITE}{settings.google_analytics.tracking_id or 'console only'}{C.RESET}"
    )
    print(f"  Logstash:         {C.WHITE}{settings.logstash.url or 'console only'}{C.RESET}")
    kafka_target = (
        f"{settings.kafka.bootstrap_servers} ({settings.kafka.events_topic})"
        if settings.kafka.bootstrap_servers
        else "console only"
    )
    print(f"  Kafka:            {C.WHITE}{kafka_target}{C.RESET}")
    print()


def _on_off(flag: bool) -> str:
    return "enabled" if flag else "disabled"
