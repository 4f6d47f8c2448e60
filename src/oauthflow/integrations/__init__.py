"""Framework integrations for oauthflow.

Import the submodule for your framework, e.g. ``oauthflow.integrations.fastapi``.
"""

__all__ = ["fastapi", "flask"]
