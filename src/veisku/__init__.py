"""veisku - a personal, file-oriented document manager."""

__version__ = "0.1.0"
