"""
NFL Playoff Watch

Team records and playoff contention status for every NFL franchise.
"""
