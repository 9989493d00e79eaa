"""Output module for Talon results."""

# Shared color scheme for result lines
COLORS = {
    "success": "green",
    "failure": "red",
}
