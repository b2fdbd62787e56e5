"""Simple-message wire format, joint data and trajectory handling for industrial robot controllers."""

__version__ = "0.1.0"