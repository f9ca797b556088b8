"""
Notes Backend — Middleware Package
===================================

What:  Per-request stages that run before (and around) the route handler.

Request pipeline:
    Request → [Request ID] → [Access Log] → body parsing
            → token_extractor → current_user → find_note / find_blog
            → Route Handler
    Any stage may raise; `errors.register_exception_handlers` is the terminal
    stage that turns the exception into a JSON response.

    - request_id.py / logging.py: Starlette middleware around every request
    - auth.py:   bearer-token dependencies (token_extractor, current_user)
    - lookup.py: entity-by-id dependencies (find_note, find_blog)
    - errors.py: exception → HTTP status translation
"""
