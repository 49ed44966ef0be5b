"""pm_web_svc: REST API for programs, projects, tasks and kanban boards."""

__version__ = "1.0.0"
