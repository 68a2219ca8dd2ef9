"""Route handlers for the reference server.

- status.py: Liveness route
- echo.py: Routes that decode a JSON body and send it back
"""
