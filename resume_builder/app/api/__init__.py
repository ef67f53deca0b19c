"""
This package holds the HTTP surface of the resume builder.

Notes:
    1. Route handlers live in `api.routes` and stay thin; the logic they call
       lives in `api.routes.route_logic`.
    2. Shared FastAPI dependencies live in `api.dependencies`.

"""
