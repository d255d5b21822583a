"""
Output modules for the data import.

- writer: JSON, CSV and text export of scanned metadata
"""
