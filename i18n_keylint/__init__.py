"""Locale-key consistency checker for vue-i18n style projects."""

__version__ = "0.1.0"
