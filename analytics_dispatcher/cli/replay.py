# ==============================================================================
# Replay Command
# ==============================================================================
"""
Replay a scripted sequence of dispatcher calls through the configured providers.

Scripts are JSON Lines files, one call per line:

    {"op": "set_app_name", "args": ["Museum Kiosk"]}
    {"op": "page_view", "args": ["/feynman"]}
    {"op": "page_view", "args": ["/tesla"], "delay_ms": 1500}
    {"op": "event", "args": [{"category": "Video", "action": "Play"}]}
    {"op": "end_session", "delay_ms": 30000}

``delay_ms`` sleeps before the call, so page and session timings come out as
they would on the device. Blank lines and lines starting with ``#`` are skipped.
"""

import json
import logging
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from analytics_dispatcher.cli.shared import C, I, configure_logging

logger = logging.getLogger(__name__)

# Dispatcher methods a script may call
REPLAY_OPS = frozenset(
    {
        "set_language",
        "change_language",
        "event",
        "set_page",
        "page_view",
        "timing",
        "start_time_tracker",
        "stop_time_tracker",
        "set_app_version",
        "set_app_name",
        "set_app_id",
        "set_user_id",
        "start_session",
        "end_session",
        "raw",
    }
)


def parse_script(lines: Iterable[str]) -> tuple[list[dict], list[str]]:
    """
    Parse replay script lines.

    Args:
        lines: Lines of a JSON Lines script

    Returns:
        Tuple of (steps, errors). Each step is a dict with ``line``, ``op``,
        ``args`` and ``delay_ms``. Invalid lines are reported in errors and
        skipped.
    """
    steps: list[dict] = []
    errors: list[str] = []

    for number, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            errors.append(f"line {number}: invalid JSON ({e.msg})")
            continue
        if not isinstance(record, dict):
            errors.append(f"line {number}: expected an object")
            continue

        op = record.get("op")
        if op not in REPLAY_OPS:
            errors.append(f"line {number}: unknown op {op!r}")
            continue

        try:
            delay_ms = int(record.get("delay_ms", 0))
        except (TypeError, ValueError):
            errors.append(f"line {number}: invalid delay_ms {record['delay_ms']!r}")
            continue

        args = record.get("args", [])
        if not isinstance(args, list):
            args = [args]
        steps.append({"line": number, "op": op, "args": args, "delay_ms": delay_ms})

    return steps, errors


def run_script(
    dispatcher: Any,
    steps: Iterable[dict],
    sleep: Callable[[float], None] = time.sleep,
) -> tuple[int, list[str]]:
    """
    Run parsed steps against a dispatcher.

    A step whose arguments do not fit the dispatcher method is reported and
    skipped; the remaining steps still run.

    Args:
        dispatcher: AnalyticsDispatcher instance
        steps: Steps from parse_script()
        sleep: Sleep function (seconds), replaceable in tests

    Returns:
        Tuple of (calls made, errors)
    """
    calls = 0
    errors: list[str] = []
    for step in steps:
        if step["delay_ms"] > 0:
            sleep(step["delay_ms"] / 1000.0)
        logger.debug("Replaying %s%s", step["op"], tuple(step["args"]))
        try:
            getattr(dispatcher, step["op"])(*step["args"])
        except TypeError as e:
            errors.append(f"line {step.get('line', '?')}: bad arguments for {step['op']} ({e})")
            continue
        calls += 1
    return calls, errors


# ==============================================================================
# Commands
# ==============================================================================


def replay(
    script: Annotated[
        Path,
        typer.Argument(exists=True, dir_okay=False, readable=True, help="JSON Lines script"),
    ],
    provider: Annotated[
        Optional[list[str]],
        typer.Option("--provider", "-p", help="Provider to use (repeatable, overrides settings)"),
    ] = None,
    no_delay: Annotated[
        bool, typer.Option("--no-delay", help="Ignore delay_ms and replay immediately")
    ] = False,
) -> None:
    """Replay a script of dispatcher calls through the configured providers."""
    from analytics_dispatcher.core.dispatcher import AnalyticsDispatcher
    from analytics_dispatcher.providers.factory import get_provider
    from analytics_dispatcher.utils.config import get_settings

    configure_logging()
    settings = get_settings()

    with script.open(encoding="utf-8") as f:
        steps, errors = parse_script(f)

    try:
        providers = [get_provider(name, settings) for name in provider] if provider else None
        dispatcher = AnalyticsDispatcher.from_settings(settings, providers)
    except ValueError as e:
        print(f"{C.BRIGHT_RED}{I.CROSS} {e}{C.RESET}")
        raise typer.Exit(1)

    sleep = (lambda _seconds: None) if no_delay else time.sleep
    with dispatcher:
        calls, run_errors = run_script(dispatcher, steps, sleep=sleep)
    errors.extend(run_errors)

    for error in errors:
        print(f"{C.YELLOW}{I.WARN} {error}{C.RESET}")

    print(
        f"{C.GREEN}{I.CHECK}{C.RESET} Replayed {calls} calls through "
        f"{len(dispatcher.providers)} provider(s), {len(errors)} line(s) skipped"
    )
