"""
Routes package for the Taskboard API.

This package contains route blueprints, all mounted under ``/api``:
- auth: health check, registration and login
- resources: owner-scoped CRUD for projects and tasks
- analytics: global and per-account statistics
"""
