"""
auth: user registration and authentication.

Provides:
  • Credential schemas (register / login payload validation)
  • Password hashing (bcrypt)
  • Signed, time-bound identity tokens
  • ``UserRepository`` persistence gateway
  • ``AuthService`` register / login use cases
  • ``/users`` API routes
"""
