"""Lambda Entry Point — API Gateway proxy events into the FastAPI app.

Invariants:
    - One binding: the same app, store wiring and dispatcher serve Lambda and ASGI
    - handler is the function name configured in the Lambda runtime
      (user_api.lambda_handler.handler)

Design Decisions:
    - Mangum over a hand-written event translator: handles REST (v1) and HTTP API (v2)
      payloads, base64 bodies and multi-value query strings
"""

from mangum import Mangum

from user_api.main import app

handler = Mangum(app, lifespan="auto")
