"""Pricing, fulfillment and print scheduling engine for a made-to-order print shop."""

__version__ = "0.1.0"
