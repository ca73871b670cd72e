"""tagedit — inspect and edit audio file tags from the command line."""

__version__ = "1.0.0"
