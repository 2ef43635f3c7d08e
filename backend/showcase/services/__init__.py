"""Service layer.

Services orchestrate repositories inside a Unit of Work and raise the
framework-agnostic errors from :mod:`showcase.services._shared.errors`.
Import concrete services from their subpackages, e.g.
``from showcase.services.auth.service import AuthService``.
"""
