"""
Blog Admin - REST backend for administering a personal blog

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Admin authentication and session management
- storage: Data persistence abstraction
- config: Application configuration
- api: HTTP request/response models
"""

__version__ = "1.0.0"
