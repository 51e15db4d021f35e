# ==============================================================================
# Session Commands
# ==============================================================================
"""
Session estimation command for the analytics dispatcher CLI.

Shows how a raw session length would be corrected for an idle-timeout ending.
"""

import json
from typing import Annotated, Optional

import typer

from analytics_dispatcher.cli.shared import C
from analytics_dispatcher.core.session import corrected_duration, mean, page_correction, sample_sd


def session_estimate(
    raw: Annotated[int, typer.Option("--raw", "-r", help="Raw session length in ms")],
    idle_timeout: Annotated[
        int, typer.Option("--idle-timeout", "-t", min=0, help="Idle timeout in ms")
    ] = 0,
    page_time: Annotated[
        Optional[list[int]],
        typer.Option("--page-time", "-p", help="Page dwell time in ms (repeatable)"),
    ] = None,
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output as JSON for scripting")
    ] = False,
) -> None:
    """Estimate a session length corrected for an idle-timeout ending.

    Examples:
        analytics-dispatcher session estimate -r 20000 -t 5000 -p 1000 -p 2000 -p 3000
    """
    page_times = page_time or []
    result = {
        "raw_ms": raw,
        "idle_timeout_ms": idle_timeout,
        "page_times_ms": page_times,
        "mean_ms": mean(page_times),
        "sd_ms": sample_sd(page_times),
        "page_correction_ms": page_correction(page_times),
        "corrected_ms": corrected_duration(raw, idle_timeout, page_times),
    }

    if json_output:
        print(json.dumps(result, indent=2))
        return

    print()
    print(f"{C.BOLD}Session estimate{C.RESET}")
    print()
    print(f"  Raw length:       {C.WHITE}{raw} ms{C.RESET}")
    print(f"  Page samples:     {C.WHITE}{len(page_times)}{C.RESET}")
    print(f"  Mean:             {C.WHITE}{result['mean_ms']:.1f} ms{C.RESET}")
    print(f"  SD:               {C.WHITE}{result['sd_ms']:.1f} ms{C.RESET}")
    print(f"  Page correction:  {C.WHITE}{result['page_correction_ms']} ms{C.RESET}")
    print(f"  Idle timeout:     {C.WHITE}{idle_timeout} ms{C.RESET}")
    print(f"  Corrected length: {C.CYAN}{result['corrected_ms']} ms{C.RESET}")
    print()
