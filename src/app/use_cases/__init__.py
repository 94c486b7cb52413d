"""
Use Cases

Organized into domain folders:
- auth/: Registration, login and password reset
- sessions/: Session cookie lifecycle
- two_factor/: Email-code two-factor authentication
- users/: Profile and business user management
- audit/: Audit logs

Import from subdirectories.
"""
