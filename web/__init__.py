"""
Web surface for the Energy Prices Widget.
"""
