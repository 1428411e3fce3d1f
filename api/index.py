"""
Serverless entry point - wraps the ASGI app for AWS Lambda style runtimes
"""
from mangum import Mangum

from index import app

# Lifespan events are not used by the app
handler = Mangum(app, lifespan="off")
