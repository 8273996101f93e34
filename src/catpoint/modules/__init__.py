"""
Modules package for catpoint.

Modules add behavior on top of the core panel state:
- image: cat detection interface and stand-ins
- security: the alarm state machine and SecurityService
"""
