"""
ASGI entry point for the Task Manager API
Serve with: uvicorn index:app
"""
from api.app import create_app
from api.config import settings, configure_logging

configure_logging(settings)

# One process, one store - created inside the factory
app = create_app(settings)
