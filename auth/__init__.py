"""
auth — User authentication module.

Provides:
  • JWT token issuance & verification
  • Password hashing (bcrypt)
  • Register / sign-in API routes
  • ``authorize_owner`` FastAPI dependency binding task access to the token subject
"""
