"""
Gestionnaires d'exceptions utilisés par la factory.
- HTTPException (429 du rate limiting, 404...): JSON {"detail": ...}.
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(HTTPException)
    async def json_http_errors(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))
