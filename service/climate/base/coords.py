"""Parsing of the degrees/minutes/seconds coordinates used by AEMET station lists."""


def dms_to_degrees(text: str) -> float:
    """Converts a "DDMMSS" string to decimal degrees.

    Example: dms_to_degrees("402443") == 40.41194...
    """
    if len(text) != 6 or not text.isdigit():
        raise ValueError(f"Invalid DMS coordinate: {text!r}")
    degrees = int(text[0:2])
    minutes = int(text[2:4])
    seconds = int(text[4:6])
    if minutes >= 60 or seconds >= 60:
        raise ValueError(f"Invalid DMS coordinate: {text!r}")
    return degrees + minutes / 60.0 + seconds / 3600.0


def parse_latitude(text: str) -> float:
    """Parses a "DDMMSS" latitude (northern hemisphere) into decimal degrees."""
    return round(dms_to_degrees(text.strip()), 6)


def parse_longitude(text: str) -> float:
    """Parses a "DDMMSSd" longitude into decimal degrees.

    The trailing direction digit is 1 for east and 2 for west; western
    longitudes are returned as negative values.
    """
    text = text.strip()
    if len(text) != 7:
        raise ValueError(f"Invalid length for longitude: {text!r}")
    degrees = dms_to_degrees(text[:6])
    direction = text[6]
    if direction == "1":
        return round(degrees, 6)
    elif direction == "2":
        return round(-degrees, 6)
    raise ValueError(f"Invalid longitude direction in {text!r}")
