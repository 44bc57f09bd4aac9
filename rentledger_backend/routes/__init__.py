from .tenants import bp as tenants_bp

__all__ = ["tenants_bp"]
