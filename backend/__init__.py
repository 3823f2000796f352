"""
Backend package for the search and sheets proxy API.

This package provides a FastAPI application that serves predictive search
suggestions from a local row store and proxies read-only Google Sheets
requests with a server-held service account.
"""
