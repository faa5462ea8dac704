"""
feedrelic package marker.

Upload CSV or Excel files and send their rows to New Relic as custom events.
"""
