"""Radio proximity scanning."""

from src.services.radio.scanner import RadioProximityScanner, matches_identifier

__all__ = ["RadioProximityScanner", "matches_identifier"]
