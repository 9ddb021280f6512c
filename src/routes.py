from fastapi import APIRouter, Response

from config import settings

# Router for organizing routes
base_routes = APIRouter()
options_routes = APIRouter()


# ROOT ROUTE
@base_routes.get("/")
def home():
    return {
        "message": f"Welcome to {settings.SERVICE_NAME}!",
        "description": "Relay between the client app and the PayHero M-Pesa gateway.",
        "endpoints": {
            "payment": "POST /api/v1/payment",
            "callback": "POST /api/v1/callback",
            "test": "GET /api/v1/test",
        },
    }


# Plain OPTIONS requests (no CORS preflight headers) are answered with an empty 200
@options_routes.options("/{path:path}", include_in_schema=False)
def options_ok(path: str):
    return Response(status_code=200)
