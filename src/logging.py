"""Structured simulation event logging"""
import json
from typing import Dict, Any, Optional, List
from datetime import datetime, UTC


def log_sim_event(
    event_type: str,
    payload: Dict[str, Any],
    logger: Optional[List[Dict]] = None,
    timestamp: Optional[datetime] = None,
    echo: bool = True
) -> Dict[str, Any]:
    """
    Log a structured simulation event.

    Args:
        event_type: Type of event (e.g., "command_applied", "command_rejected", "goal_reached", "run_failed")
        payload: Event-specific data (step, command, location, fuel, ...)
        logger: Optional list to append to (e.g., the run's event log)
        timestamp: Optional timestamp (defaults to now, UTC)
        echo: Print the event as a [SIM_LOG] line

    Returns:
        Structured log entry dict
    """
    if timestamp is None:
        timestamp = datetime.now(UTC)

    log_entry = {
        'timestamp': timestamp.isoformat(),
        'event_type': event_type,
        **payload
    }

    if logger is not None:
        logger.append(log_entry)

    if echo:
        print(f"[SIM_LOG] {event_type}: {json.dumps(payload, default=str)}")

    return log_entry
