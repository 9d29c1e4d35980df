"""Office Manager package.

This package is organized by feature modules (users, employees, tasks, files)
with a thin Flask controller layer over service/repository layers.
"""
