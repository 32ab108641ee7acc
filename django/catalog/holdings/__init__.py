"""
The `holdings` app normalizes copy-level availability data from catalog
backends into canonical holdings entries, ranks them for display, and
evaluates pickup-location rules for hold requests.
"""
