"""Redirect signal encoding and admin notices."""

from .codec import SIGNAL_FIELDS, Notice, decode, default_message, encode, strip_signal

__all__ = ["Notice", "SIGNAL_FIELDS", "decode", "default_message", "encode", "strip_signal"]
