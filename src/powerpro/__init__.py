"""power-pro: strategy composition engine for strength-training prescriptions."""

__version__ = "0.1.0"
