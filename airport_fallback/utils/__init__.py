"""
Utility functions for filtering and compacting OurAirports records.
"""
