"""Pricing, fulfillment and order rules."""
