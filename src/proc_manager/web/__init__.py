"""Browser-facing JSON API for the process manager.

This package provides a Flask application that exposes the shell and
the state snapshot over HTTP.  It is an **optional** extra. Install
with::

    pip install proc-manager[web]

The ``create_app`` factory in ``app.py`` serves two endpoints:

- ``POST /api/execute``: execute a shell command and return JSON.
- ``GET /api/state``: the queues and the process tree as JSON.
"""
