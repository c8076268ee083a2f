from __future__ import annotations

from typing import Optional

from ..core.constants import EMPTY_CELL


def format_hours(hours: float) -> str:
    """'-' for zero, '45m', '8h', '8h 30m'."""
    total_minutes = int(round(max(hours, 0) * 60))
    h, m = divmod(total_minutes, 60)
    if h == 0 and m == 0:
        return EMPTY_CELL
    if h == 0:
        return f"{m}m"
    if m == 0:
        return f"{h}h"
    return f"{h}h {m}m"


def format_hours_decimal(hours: float) -> str:
    return f"{hours:.2f}"


def format_entry_method(method: Optional[str]) -> str:
    if not method:
        return "Manual"
    value = getattr(method, "value", method)
    return {
        "manual": "Manual",
        "geofence_notification": "Geofence (Notification)",
        "geofence_auto": "Geofence (Auto)",
        "admin_override": "Admin Override",
    }.get(value, value)


def format_gps_coordinates(
    lat: Optional[float],
    lon: Optional[float],
    accuracy: Optional[float] = None,
) -> str:
    if lat is None or lon is None:
        return "N/A"
    acc = f" (±{accuracy:g}m)" if accuracy else ""
    return f"{float(lat):.6f}, {float(lon):.6f}{acc}"
