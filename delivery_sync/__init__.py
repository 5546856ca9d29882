"""
Delivery ticket sync: spreadsheet export -> analytics/aging tables.
"""

__version__ = "0.1.0"
