from fieldclock.core.enums import EntryMethod
from fieldclock.payroll.formatting import (
    format_entry_method,
    format_gps_coordinates,
    format_hours,
    format_hours_decimal,
)


def test_format_hours():
    assert format_hours(0) == "-"
    assert format_hours(0.5) == "30m"
    assert format_hours(8) == "8h"
    assert format_hours(8.5) == "8h 30m"
    assert format_hours(1.9999) == "2h"


def test_format_hours_decimal():
    assert format_hours_decimal(8.5) == "8.50"
    assert format_hours_decimal(0) == "0.00"


def test_entry_method_labels():
    assert format_entry_method(None) == "Manual"
    assert format_entry_method(EntryMethod.GEOFENCE_AUTO) == "Geofence (Auto)"
    assert format_entry_method("geofence_notification") == "Geofence (Notification)"
    assert format_entry_method("admin_override") == "Admin Override"
    assert format_entry_method("kiosk") == "kiosk"


def test_gps_coordinates():
    assert format_gps_coordinates(None, -122.4) == "N/A"
    assert format_gps_coordinates(37.7749, -122.4194) == "37.774900, -122.419400"
    assert format_gps_coordinates(37.7749, -122.4194, 5.0) == "37.774900, -122.419400 (±5m)"
