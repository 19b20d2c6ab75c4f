"""Constants and configuration defaults for the turf editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Event loop
    POLL_TIMEOUT = 0.05  # Seconds to wait for input before checking for resize

    # Rendering
    PLACEHOLDER = "~"  # Drawn on rows past the end of the file
    BANNER_TEXT = "Welcome To Turf Editor"
    BANNER_ROWS = 1

    # Keys
    QUIT_KEY = "q"  # Used with Ctrl

    # Settings file
    APP_NAME = "turf"
    SETTINGS_FILENAME = "settings.json"

    # Command line
    USAGE = "Usage: turf [--version] [--log-file PATH] FILE"
