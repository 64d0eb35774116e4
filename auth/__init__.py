"""
auth — User registration and login.

Provides:
  • Request validation for register / login bodies
  • Password hashing (bcrypt, per-password salt)
  • Signed token creation & verification
  • The credential store and the ``AuthService`` flows
  • ``/user/register`` and ``/user/login`` API routes
"""
