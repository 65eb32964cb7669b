"""
userauth - email/password authentication service.

Registration, login, bearer-token authorization, logout and
email verification over a small FastAPI surface.
"""

__version__ = "0.1.0"
__author__ = "userauth maintainers"
