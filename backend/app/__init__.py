# backend/app/__init__.py
"""
Teams notification relay backend application package.

This package contains:
- main: FastAPI application entrypoint
- teams: Teams / Microsoft Graph notification relay
- notifications: delivery event (audit) emitters
- utils: environment variable helpers
"""
