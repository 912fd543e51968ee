"""xtools: local XAMPP development automation."""

__version__ = "0.1.0"
