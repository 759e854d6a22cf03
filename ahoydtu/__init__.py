"""Payload tables, alarm decoding, MI status codes and radio framing for HM and MI micro-inverters."""

__version__ = "0.1.0"