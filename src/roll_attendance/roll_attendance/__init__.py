"""Roll-number attendance package.

Organized by feature modules (attendees, database, ...) with a thin Flask
controller layer over the attendance ledger and its storage repositories.
"""
