from fastapi import FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse, PlainTextResponse
from medialib.routes import session, browse, files, manage, upload, albums, pages, health
from medialib.config import FRONTEND_DIR
from medialib.errors import MediaError

app = FastAPI(title="medialib", docs_url=None, redoc_url=None, openapi_url=None)

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self' 'unsafe-inline'; "
        "style-src 'self' 'unsafe-inline'; media-src 'self'; img-src 'self'; "
        "connect-src 'self'"
    ),
}


@app.middleware("http")
async def security_headers_middleware(request, call_next):
    response = await call_next(request)
    for name, value in _SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


@app.exception_handler(MediaError)
async def media_error_handler(request: Request, exc: MediaError):
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)


@app.get("/robots.txt", include_in_schema=False)
def robots_txt():
    return PlainTextResponse("User-agent: *\nDisallow: /\n", media_type="text/plain; charset=utf-8")

app.include_router(health.router)
app.include_router(session.router)
app.include_router(browse.router)
app.include_router(files.router)
app.include_router(manage.router)
app.include_router(upload.router)
app.include_router(albums.router)
app.include_router(pages.router)

app.mount("/static", StaticFiles(directory=str(FRONTEND_DIR)), name="static")
