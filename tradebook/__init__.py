"""
Tradebook.

Trading journal for Indian equity and derivatives markets with a charge
engine for STT, exchange charges, GST, stamp duty, SEBI fees and brokerage.
"""

__version__ = "0.1.0"
