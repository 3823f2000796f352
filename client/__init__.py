"""
Client-side helpers for the search box: a debounced suggestion state
machine and the HTTP source it calls.
"""
