"""Auth0 Migration Settings Service.

This service manages the user migration web service option of an Auth0
integration:
- Render the admin settings field and its token controls
- Validate submitted settings and decide the migration token to keep
- Rotate the migration token on demand
"""

__version__ = "0.1.0"
