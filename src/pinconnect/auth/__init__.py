"""Authentication primitives.

Learn: Two building blocks, both constructed once and injected:
1. CredentialVault → bcrypt password hashing/verification
2. TokenIssuer → stateless HS256 bearer tokens (24h lifetime)

AuthService (services/auth_service.py) composes them with the user
repository. dependencies.py wires everything into FastAPI.
"""
