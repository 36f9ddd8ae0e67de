"""File for widely used constants."""

# Keys of the monthly values in per-year data files, in calendar order.
MONTHS = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

# Display modes.
# "full" lays out all selected years chronologically,
# "yearly" overlays the selected years on a single 12-month axis.
MODE_FULL = "full"
MODE_YEARLY = "yearly"
VALID_MODES = (MODE_FULL, MODE_YEARLY)

# The unit whose value range is seeded at [0, 100] instead of being empty.
PERCENT_UNIT = "%"

DEFAULT_LINE_THICKNESS = 2.0
DEFAULT_DOT_RADIUS = 3.0
DEFAULT_COMBINED_RATIO = 1.0

# Number of tick labels on a value axis.
VALUE_TICK_COUNT = 11
