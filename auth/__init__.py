"""
auth — User authentication module.

Provides:
  • Token creation & verification (HMAC-SHA256)
  • Password hashing (bcrypt)
  • Register / Login service and API routes
  • ``get_current_user`` FastAPI dependency
"""
