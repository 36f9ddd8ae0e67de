MONTH_NAMES = {
    1: "January",
    2: "February",
    3: "March",
    4: "April",
    5: "May",
    6: "June",
    7: "July",
    8: "August",
    9: "September",
    10: "October",
    11: "November",
    12: "December",
}


def month_name(month_index: int) -> str:
    """Returns the English month name for a 0-based month index."""
    return MONTH_NAMES[month_index + 1]


def month_abbr(month_index: int) -> str:
    """Returns the three-letter month abbreviation for a 0-based month index.

    Example: month_abbr(0) == "Jan"
    """
    return MONTH_NAMES[month_index + 1][:3]


def iso_date(year: int, month_index: int, day: int) -> str:
    """Returns an ISO date string like "2017-07-25" for a 0-based month index."""
    return f"{year:04d}-{month_index + 1:02d}-{day:02d}"
