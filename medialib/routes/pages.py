from fastapi import APIRouter
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from starlette.requests import Request
from medialib.config import FRONTEND_DIR, IMAGE_EXTENSIONS, VIDEO_EXTENSIONS
from medialib.media import parse_extensions

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(FRONTEND_DIR))

_common = {
    "video_extensions": sorted(parse_extensions(VIDEO_EXTENSIONS)),
    "image_extensions": sorted(parse_extensions(IMAGE_EXTENSIONS)),
}


@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return templates.TemplateResponse(request, "index.html", {**_common})
