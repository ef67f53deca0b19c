"""This module serves as the entry point for the resume builder application.

It groups the content model, the reorder engine, the persistence adapters and
the FastAPI routes that drive the drag-and-drop builder.

Notes:
    1. This module does not contain any functions or classes of its own.
    2. The application logic is defined in other modules, such as:
       - app.core.config: Contains application settings and configuration.
       - app.database.database: Manages database engine and session creation.
       - app.models.content: Defines the resume content document and record pool.
       - app.api.routes.route_logic.resume_reorder: Computes drag-and-drop moves.
    3. No disk, network, or database access occurs in this module directly.

"""
