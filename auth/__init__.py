"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt, work factor 10)
  • JWT session token creation & verification
  • Register / Login / Logout / Me API routes
  • ``SessionGuard`` and the ``get_current_user`` FastAPI dependency
"""
