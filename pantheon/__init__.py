"""
pantheon: concurrent multi-source aggregation of god names.
"""
